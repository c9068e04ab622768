"""Small HTTP-related constants shared across the client.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

DEFAULT_JOB_URL = "http://api.blitline.com/job"
DEFAULT_LISTEN_URL = "http://cache.blitline.com/listen"

JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}

# Status reported when no HTTP response was received or it was unusable.
FAILURE_STATUS = -1
# Status forced when the service answers with ``results.error``.
SERVICE_ERROR_STATUS = 500
