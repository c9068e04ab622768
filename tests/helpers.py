"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists to prevent test suites from
growing lots of one-off stub services as coverage expands.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from tests.conftest import StubService


@dataclass
class ScriptedService(StubService):
    """StubService that plays back a scripted sequence of responses/exceptions.

    Each item is either an ``httpx.Response`` or an exception to raise. When
    the script runs out the base ``status_code``/``body`` are used.
    """

    script: list[httpx.Response | Exception] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        if not self.script:
            return super().handler(request)
        self.requests.append(request)
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def mock_client(service: StubService) -> httpx.Client:
    """Return an ``httpx.Client`` whose requests are answered by *service*."""
    return httpx.Client(transport=httpx.MockTransport(service.handler))
