"""Read-only checks over caller-built job documents.

Job documents are either the job object itself or the object wrapped under
a top-level ``"json"`` key, as the service's form-post examples do.
"""

from __future__ import annotations

from blitline.errors import ResponseParseError
from blitline.json_value import JsonNull, JsonObject, parse_json


def _job_object(job: str | bytes) -> JsonObject | None:
    try:
        doc = parse_json(job)
    except ResponseParseError:
        return None
    if not isinstance(doc, JsonObject):
        return None
    wrapped = doc.get("json")
    if isinstance(wrapped, JsonObject):
        return wrapped
    return doc


def wants_long_polling(job: str | bytes) -> bool:
    """Return True if the job sets ``long_polling`` to true."""
    obj = _job_object(job)
    if obj is None:
        return False
    node = obj.get("long_polling")
    return node is not None and node.stringify().lower() == "true"


def has_postback_url(job: str | bytes) -> bool:
    """Return True if the job names a ``postback_url``."""
    obj = _job_object(job)
    if obj is None:
        return False
    node = obj.get("postback_url")
    if node is None or isinstance(node, JsonNull):
        return False
    return bool(node.stringify().strip())
