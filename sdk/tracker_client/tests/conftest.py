# sdk/tracker_client/tests/conftest.py
"""
Shared fixtures for SDK tests that talk to a real in-process API.

The FastAPI app is served through httpx.ASGITransport; FlakyTransport sits
in front of it so tests can take the network down and bring it back.
"""

import asyncio
from typing import Optional

import pytest
import httpx

from tracker.config import TrackerConfig
from tracker.main import create_app
from tracker_client import (
    AsyncTrackerClient,
    MemoryStore,
    NetworkMonitor,
    OfflineQueue,
    ProjectCache,
)

API_URL = "http://testserver"


class FlakyTransport(httpx.AsyncBaseTransport):
    """ASGI transport that can simulate an unreachable server."""

    def __init__(self, app):
        self._inner = httpx.ASGITransport(app=app)
        self.down = False
        self.gate: Optional[asyncio.Event] = None
        self.attempts = 0
        self.requests = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if self.gate is not None:
            await self.gate.wait()
        self.attempts += 1
        if self.down:
            raise httpx.ConnectError("network is down", request=request)
        self.requests.append((request.method, request.url.path))
        return await self._inner.handle_async_request(request)


@pytest.fixture
def server_app():
    """Fresh seeded API app per test."""
    return create_app(TrackerConfig(environment="test", seed_data=True))


@pytest.fixture
def transport(server_app):
    return FlakyTransport(server_app)


@pytest.fixture
async def api_client(transport):
    client = AsyncTrackerClient(api_url=API_URL, transport=transport)
    yield client
    await client.close()


@pytest.fixture
def storage():
    return MemoryStore()


@pytest.fixture
def queue(storage):
    return OfflineQueue(storage)


@pytest.fixture
def cache():
    return ProjectCache()


@pytest.fixture
def network():
    return NetworkMonitor(initial=True)
