"""Value objects returned by the client."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from blitline._http import FAILURE_STATUS

NO_ERROR: Final[str] = "No Error"


class ImageResult(Mapping[str, str]):
    """One processed image as reported by the service.

    A read-only mapping of field name to stringified value, in the order the
    service sent them. Compares equal to any mapping with the same items.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str] | None = None) -> None:
        self._fields = MappingProxyType(dict(fields or {}))

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"ImageResult({dict(self._fields)!r})"

    @property
    def image_identifier(self) -> str | None:
        """The caller-chosen identifier from the job's ``save`` block."""
        return self._fields.get("image_identifier")

    @property
    def s3_url(self) -> str | None:
        """Where the service stored the processed image."""
        return self._fields.get("s3_url")


@dataclass(frozen=True)
class SubmissionResult:
    """Normalized outcome of one job submission.

    ``status_code`` is the HTTP status, ``-1`` when no usable response was
    received, or ``500`` when the service reported an error. Check
    ``has_error`` rather than the status code alone.
    """

    job_id: str = ""
    status_code: int = FAILURE_STATUS
    error_message: str = NO_ERROR
    images: tuple[ImageResult, ...] = ()

    @property
    def has_error(self) -> bool:
        return self.error_message != NO_ERROR

    @classmethod
    def failed(cls, error_message: str) -> SubmissionResult:
        """Build the result for a submission that never got a usable response."""
        return cls(status_code=FAILURE_STATUS, error_message=error_message)


@dataclass(frozen=True)
class PostbackResult:
    """Raw long-poll payload; interpreting it is up to the caller."""

    text: str

    def __str__(self) -> str:
        return self.text
