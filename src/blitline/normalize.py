"""Map raw service responses onto ``SubmissionResult``.

The service answers a job submission with one of a few shapes::

    {"results": {"job_id": "...", "images": [{...}, ...]}}   # accepted
    {"results": {"error": "..."}}                            # rejected
    {"error": "..."}                                         # no results at all

Anything else normalizes to an empty, error-free result carrying the
transport status code.
"""

from __future__ import annotations

from blitline._http import SERVICE_ERROR_STATUS
from blitline.json_value import JsonObject, JsonValue, parse_json
from blitline.models import NO_ERROR, ImageResult, SubmissionResult


def normalize(document: JsonValue, status_code: int) -> SubmissionResult:
    """Build a ``SubmissionResult`` from a decoded response.

    Args:
        document: The decoded response body.
        status_code: HTTP status of the response, or ``-1`` when none arrived.

    Returns:
        The normalized result. A ``results.error`` forces the status to 500.

    Raises:
        ResponseShapeError: A protocol-defined key holds the wrong JSON kind.
    """
    root = document.expect_object()
    job_id = ""
    error_message = NO_ERROR
    images: tuple[ImageResult, ...] = ()

    results_value = root.get("results")
    if results_value is not None:
        results = results_value.expect_object("$.results")
        error = results.get("error")
        if error is not None:
            error_message = error.stringify()
            status_code = SERVICE_ERROR_STATUS
        raw_job_id = results.get("job_id")
        if raw_job_id is not None:
            job_id = raw_job_id.stringify()
        images = _extract_images(results)
    else:
        # Failures that never reached job processing (including the payload
        # synthesized for transport errors) carry a bare top-level error.
        error = root.get("error")
        if error is not None:
            error_message = error.stringify()

    return SubmissionResult(
        job_id=job_id,
        status_code=status_code,
        error_message=error_message,
        images=images,
    )


def normalize_text(text: str | bytes, status_code: int) -> SubmissionResult:
    """Parse *text* and normalize it.

    Raises:
        ResponseParseError: *text* is not valid JSON.
        ResponseShapeError: See ``normalize``.
    """
    return normalize(parse_json(text), status_code)


def flatten_image(image: JsonObject) -> ImageResult:
    """Stringify every field of one ``results.images`` element."""
    return ImageResult({key: value.stringify() for key, value in image.items()})


def _extract_images(results: JsonObject) -> tuple[ImageResult, ...]:
    raw = results.get("images")
    if raw is None:
        return ()
    return tuple(
        flatten_image(item.expect_object(f"$.results.images[{idx}]"))
        for idx, item in enumerate(raw.expect_array("$.results.images"))
    )
