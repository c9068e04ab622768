"""HTTP transport: one pooled ``httpx.Client`` with failures returned as values.

A ``Transport`` is constructed once and shared by every call a client makes.
It can be handed a caller-owned ``httpx.Client`` (for custom proxies, mounts,
or ``httpx.MockTransport`` in tests), in which case ``close()`` leaves that
client open.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from types import TracebackType
from typing import Any, Final

import httpx

from blitline._http import FAILURE_STATUS
from blitline.errors import TransportError, describe_exception

log = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset()


@dataclass(frozen=True)
class Exchange:
    """Outcome of one HTTP request.

    Either a response arrived (``error is None``; ``status_code`` and ``text``
    describe it) or the request failed in transit and ``error`` says why.
    """

    method: str
    url: str
    status_code: int = FAILURE_STATUS
    text: str = ""
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Transport:
    """Thin synchronous wrapper around ``httpx.Client``."""

    def __init__(
        self,
        *,
        timeout_s: float | None = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.timeout_s = timeout_s
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout_s)

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def post(
        self,
        url: str,
        content: bytes,
        *,
        headers: dict[str, str] | None = None,
        timeout_s: float | None | _Unset = UNSET,
    ) -> Exchange:
        """POST *content* to *url*."""
        return self._send("POST", url, timeout_s, content=content, headers=headers)

    def get(self, url: str, *, timeout_s: float | None | _Unset = UNSET) -> Exchange:
        """GET *url*."""
        return self._send("GET", url, timeout_s)

    def _send(
        self,
        method: str,
        url: str,
        timeout_s: float | None | _Unset,
        **kwargs: Any,
    ) -> Exchange:
        timeout = self.timeout_s if isinstance(timeout_s, _Unset) else timeout_s
        try:
            response = self._client.request(method, url, timeout=timeout, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            error = TransportError(
                describe_exception(exc),
                method=method,
                url=url,
                hint=_transport_hint(exc),
            )
            error.__cause__ = exc
            log.warning("%s %s failed: %s", method, url, error)
            return Exchange(method=method, url=url, error=error)

        log.debug("%s %s -> %s", method, url, response.status_code)
        return Exchange(
            method=method,
            url=url,
            status_code=response.status_code,
            text=response.text,
        )

    def close(self) -> None:
        """Release pooled connections if this transport created the client."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _transport_hint(exc: BaseException) -> str | None:
    if isinstance(exc, httpx.TimeoutException):
        return "The request timed out; consider raising the configured timeout."
    if isinstance(exc, httpx.ConnectError):
        return "Could not connect; check the endpoint URL and network access."
    return None
