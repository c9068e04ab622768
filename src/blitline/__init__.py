"""blitline: a client for the Blitline image-processing service.

Public API:
    - BlitlineClient: submit() jobs and long_poll() for their results
    - Config: endpoints, timeouts and encoding
    - SubmissionResult / ImageResult / PostbackResult: returned values
    - normalize(): map a decoded service response onto SubmissionResult
"""

from __future__ import annotations

import logging

from blitline.client import POST_FAILURE, UNSUPPORTED_ENCODING, BlitlineClient
from blitline.config import Config
from blitline.errors import (
    BlitlineError,
    ConfigurationError,
    ResponseParseError,
    ResponseShapeError,
    TransportError,
)
from blitline.jobs import has_postback_url, wants_long_polling
from blitline.models import NO_ERROR, ImageResult, PostbackResult, SubmissionResult
from blitline.normalize import normalize, normalize_text
from blitline.transport import Exchange, Transport

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("blitline-client")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("blitline").addHandler(logging.NullHandler())

__all__ = [
    "NO_ERROR",
    "POST_FAILURE",
    "UNSUPPORTED_ENCODING",
    "BlitlineClient",
    "BlitlineError",
    "Config",
    "ConfigurationError",
    "Exchange",
    "ImageResult",
    "PostbackResult",
    "ResponseParseError",
    "ResponseShapeError",
    "SubmissionResult",
    "Transport",
    "TransportError",
    "has_postback_url",
    "normalize",
    "normalize_text",
    "wants_long_polling",
]
