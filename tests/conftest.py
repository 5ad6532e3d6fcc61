"""Pytest configuration and shared fixtures for mcp-toolhub tests.

This module provides common fixtures used across all test modules,
including a fake MCP registry, test app creation and async client setup.
"""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mcp_toolhub import create_app
from mcp_toolhub.config import ToolhubSettings
from mcp_toolhub.mcp import McpClient, StaticTokenProvider

REGISTRY_HOST = "https://registry.test"


class FakeRegistry:
    """In-memory MCP registry served through httpx.MockTransport.

    Attributes:
        tools: Tool descriptors returned by tools/list, per source
        results: Response bodies returned by tools/call, per tool name
        list_status: HTTP status for tools/list responses
        call_status: HTTP status for tools/call responses
        offline: If True, every request fails with a connection error
        requests: (source_id, body, headers) of every request received
    """

    def __init__(self) -> None:
        self.tools: dict[str, list[dict]] = {}
        self.results: dict[str, object] = {}
        self.list_status = 200
        self.call_status = 200
        self.offline = False
        self.requests: list[tuple[str, dict, httpx.Headers]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        source_id = request.url.path.rsplit("/", 1)[-1]
        self.requests.append((source_id, body, request.headers))

        if self.offline:
            raise httpx.ConnectError("Connection refused", request=request)

        if body["method"] == "tools/list":
            if self.list_status != 200:
                return httpx.Response(self.list_status, text="registry unavailable")
            return httpx.Response(200, json={"tools": self.tools.get(source_id, [])})

        name = body["params"]["name"]
        if self.call_status != 200:
            return httpx.Response(self.call_status, json={"error": f"{name} exploded"})
        return httpx.Response(200, json=self.results.get(name, {"result": {}}))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def count(self, method: str, source_id: str | None = None) -> int:
        """Count requests of one method, optionally for one source."""
        return sum(
            1
            for source, body, _ in self.requests
            if body["method"] == method and (source_id is None or source == source_id)
        )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def registry():
    """Create an empty fake registry."""
    return FakeRegistry()


@pytest.fixture
def clock():
    """Create a fake clock for cache expiry tests."""
    return FakeClock()


@pytest_asyncio.fixture
async def mcp_client(registry, clock):
    """Create an McpClient talking to the fake registry.

    Yields:
        McpClient: Client with a 300 second cache TTL and the fake clock.
    """
    client = McpClient(
        registry_host=REGISTRY_HOST,
        token_provider=StaticTokenProvider("test-token"),
        cache_ttl_seconds=300,
        transport=registry.transport,
        clock=clock,
    )
    yield client
    await client.close()


@pytest.fixture
def test_settings():
    """Create test settings pointing at the fake registry.

    Returns:
        ToolhubSettings: Settings instance configured for testing.
    """
    return ToolhubSettings(
        host="127.0.0.1",
        port=8000,
        registry_host=REGISTRY_HOST,
        token="test-token",
        enabled=True,
        primary_source="you_mcp",
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings, registry):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.
        registry: Fake registry fixture the app's MCP client talks to.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings, registry_transport=registry.transport)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
