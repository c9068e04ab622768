"""Blitline client: job submission and single-shot long polling.

Neither ``submit`` nor ``long_poll`` raises for network trouble. Failures come
back as values: a ``SubmissionResult`` whose ``error_message`` explains what
happened, or a ``PostbackResult`` wrapping a synthesized error payload.
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from blitline._http import JSON_HEADERS
from blitline.config import Config
from blitline.errors import ConfigurationError, ResponseParseError
from blitline.jobs import has_postback_url, wants_long_polling
from blitline.json_value import parse_json
from blitline.models import PostbackResult, SubmissionResult
from blitline.normalize import normalize
from blitline.transport import Transport

if TYPE_CHECKING:
    import httpx

log = logging.getLogger(__name__)

UNSUPPORTED_ENCODING: Final[str] = "Unsupported encoding for JSON submitted"
POST_FAILURE: Final[str] = "POST FAILURE"

_LONG_POLL_ADVICE = (
    "Please make sure you are not using a postback URL in your JSON. "
    "If there is a postback URL you CANNOT longpoll. "
    "Also, if your blitline job submission failed, there will be no longpoll result."
)


class BlitlineClient:
    """Submits jobs to Blitline and waits on their results.

    Construct one client and reuse it; it holds a pooled HTTP transport.
    Close it (or use it as a context manager) when done.

    Example:
        with BlitlineClient() as client:
            result = client.submit(job_json)
            if not result.has_error:
                postback = client.long_poll(result)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        transport: Transport | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Create a client.

        Args:
            config: Endpoints and timeouts. Defaults to ``Config()``.
            transport: A shared transport to borrow instead of creating one.
            http_client: A caller-owned ``httpx.Client`` for the transport to
                wrap. Mutually exclusive with *transport*.
        """
        if transport is not None and http_client is not None:
            raise ConfigurationError(
                "Pass either transport or http_client, not both",
                hint="A Transport already wraps its own httpx.Client.",
            )
        self.config = config if config is not None else Config()
        self._owns_transport = transport is None
        self._transport = (
            transport
            if transport is not None
            else Transport(timeout_s=self.config.timeout_s, client=http_client)
        )

    @property
    def transport(self) -> Transport:
        return self._transport

    def submit(self, job: str | bytes) -> SubmissionResult:
        """Submit a job document and normalize the service's answer.

        Args:
            job: The job as JSON text. It is sent as-is without validation.

        Returns:
            The normalized result. ``status_code`` is ``-1`` when the body
            could not be encoded, the request failed in transit, or the
            response was not JSON.

        Raises:
            ResponseShapeError: The response was JSON of an unexpected shape.
        """
        if isinstance(job, bytes):
            body = job
        else:
            try:
                body = job.encode(self.config.encoding)
            except UnicodeEncodeError as exc:
                log.warning(
                    "Job document cannot be encoded as %s: %s", self.config.encoding, exc
                )
                return SubmissionResult.failed(UNSUPPORTED_ENCODING)

        if wants_long_polling(body) and has_postback_url(body):
            log.warning("Job sets both long_polling and postback_url; long polling will not work")

        exchange = self._transport.post(
            self.config.job_url,
            body,
            headers=dict(JSON_HEADERS),
            timeout_s=self.config.timeout_s,
        )
        if exchange.ok:
            text = exchange.text
        else:
            text = json.dumps({"error": str(exchange.error)})

        try:
            document = parse_json(text)
        except ResponseParseError as exc:
            log.warning(
                "Job submission returned an unparseable body (status=%s): %s",
                exchange.status_code,
                exc,
            )
            return SubmissionResult.failed(POST_FAILURE)

        return normalize(document, exchange.status_code)

    def long_poll(self, result: SubmissionResult) -> PostbackResult | None:
        """Wait once on the listen endpoint for a submitted job.

        This is a development aid: the server holds the request open until the
        job finishes. Production code should rely on postbacks instead.

        Returns:
            ``None`` when *result* has an error or no job id. Otherwise the raw
            payload, or a synthesized error payload if the request failed.
        """
        if result.has_error or not result.job_id:
            return None

        url = f"{self.config.listen_url.rstrip('/')}/{quote(result.job_id, safe='')}"
        exchange = self._transport.get(url, timeout_s=self.config.long_poll_timeout_s)
        if exchange.ok:
            log.debug(
                "Long poll for job %s returned status %s", result.job_id, exchange.status_code
            )
            return PostbackResult(exchange.text)
        return PostbackResult(long_poll_failure_payload(result.job_id, str(exchange.error)))

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> BlitlineClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def long_poll_failure_payload(job_id: str, message: str) -> str:
    """Build the postback-shaped payload returned when a long poll fails.

    Mirrors the service's postback envelope, whose ``results`` member is
    itself a JSON document encoded as a string.
    """
    inner = json.dumps(
        {
            "images": [{"error": f"Exception during longpoll-{message}. {_LONG_POLL_ADVICE}"}],
            "job_id": job_id,
        }
    )
    return json.dumps({"results": inner})
