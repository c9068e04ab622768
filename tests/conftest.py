"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, a stubbed Blitline
service, and automatic API test skipping.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import suppress
from dataclasses import dataclass, field
import json
import logging
import os
from typing import Any

import httpx
import pytest

from blitline import BlitlineClient, Config

# =============================================================================
# Test Doubles
# =============================================================================

TEST_JOB_URL = "http://blitline.test/job"
TEST_LISTEN_URL = "http://cache.blitline.test/listen"

SAMPLE_JOB = json.dumps(
    {
        "application_id": "a",
        "src": "http://x/y.jpg",
        "functions": [
            {
                "name": "resize_to_fit",
                "params": {"width": 100},
                "save": {"image_identifier": "im1"},
            }
        ],
    }
)


@dataclass
class StubService:
    """Blitline service test double served through ``httpx.MockTransport``.

    Records every request and answers with ``status_code``/``body``, or raises
    ``error`` when set. ``calls`` doubles as the network call counter.
    """

    status_code: int = 200
    body: str = json.dumps({"results": {"job_id": "J1", "images": []}})
    error: Exception | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def respond_json(self, payload: Any, status_code: int = 200) -> None:
        self.body = json.dumps(payload)
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def stub_service() -> StubService:
    return StubService()


@pytest.fixture
def service_config() -> Config:
    return Config(job_url=TEST_JOB_URL, listen_url=TEST_LISTEN_URL)


@pytest.fixture
def http_client(stub_service: StubService) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(stub_service.handler))
    yield client
    client.close()


@pytest.fixture
def client(service_config: Config, http_client: httpx.Client) -> Iterator[BlitlineClient]:
    with BlitlineClient(service_config, http_client=http_client) as c:
        yield c


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "blitline.config.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_blitline_env(request, monkeypatch):
    """Clear BLITLINE_* variables so Config.from_env sees a clean slate.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("BLITLINE_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


@pytest.fixture
def blitline_application_id():
    """Return BLITLINE_APPLICATION_ID or skip the test if unavailable."""
    app_id = os.getenv("BLITLINE_APPLICATION_ID")
    if not app_id:
        pytest.skip("BLITLINE_APPLICATION_ID not set")
    return app_id
