from __future__ import annotations

import dataclasses

import pytest

from blitline.models import NO_ERROR, ImageResult, PostbackResult, SubmissionResult

pytestmark = pytest.mark.unit


def test_submission_result_defaults_describe_a_failure_without_error_text() -> None:
    result = SubmissionResult()

    assert result.job_id == ""
    assert result.status_code == -1
    assert result.error_message == NO_ERROR
    assert result.images == ()
    assert not result.has_error


def test_failed_results_are_errors() -> None:
    result = SubmissionResult.failed("POST FAILURE")

    assert result.has_error
    assert result.status_code == -1


def test_results_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        SubmissionResult().job_id = "x"  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        PostbackResult("{}").text = ""  # type: ignore[misc]


def test_image_result_is_a_read_only_mapping() -> None:
    source = {"image_identifier": "im1", "s3_url": "http://s3/im1.jpg"}
    image = ImageResult(source)
    source["image_identifier"] = "changed"

    assert image["image_identifier"] == "im1"
    assert image == {"image_identifier": "im1", "s3_url": "http://s3/im1.jpg"}
    assert image.get("missing") is None
    with pytest.raises(TypeError):
        image["s3_url"] = "x"  # type: ignore[index]


def test_image_result_accessors_tolerate_missing_fields() -> None:
    image = ImageResult({"error": "Could not download src"})

    assert image.image_identifier is None
    assert image.s3_url is None
    assert "ImageResult(" in repr(image)
