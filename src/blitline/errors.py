"""Exception hierarchy for the Blitline client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class BlitlineError(Exception):
    """Base exception for all Blitline client errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(BlitlineError):
    """Configuration validation failed."""


class ResponseParseError(BlitlineError):
    """A response body was not valid JSON."""


class ResponseShapeError(BlitlineError):
    """A JSON value had the wrong kind at a key the protocol defines.

    Raised by the typed accessors in :mod:`blitline.json_value`. Seeing one
    means the service changed its response format, so callers should not try
    to recover from it.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str,
        expected: str,
        actual: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.path = path
        self.expected = expected
        self.actual = actual


class TransportError(BlitlineError):
    """An HTTP exchange failed before a response was received.

    The transport hands these back inside an ``Exchange`` instead of raising
    them, so the client can turn them into result values.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str,
        url: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.method = method
        self.url = url


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)


def describe_exception(exc: BaseException) -> str:
    """Return the first non-empty message in *exc*'s chain.

    Falls back to the class name of *exc* so synthesized error payloads never
    carry an empty message.
    """
    for e in _walk_exception_chain(exc):
        text = str(e).strip()
        if text:
            return text
    return type(exc).__name__
