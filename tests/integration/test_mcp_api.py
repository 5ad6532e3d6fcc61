"""Integration tests for the MCP status, tools, and refresh endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from mcp_toolhub import create_app
from mcp_toolhub.config import ToolhubSettings


@pytest.mark.asyncio
async def test_get_status(async_client):
    """Test the status endpoint with remote tools loaded."""
    response = await async_client.get("/api/v1/mcp/status")

    assert response.status_code == 200
    data = response.json()
    assert data["enabled"] is True
    assert data["connections"] == [
        {
            "name": "you_mcp",
            "description": "Remote MCP server for web search, content fetching, and real-time information",
            "type": "external",
            "enabled": True,
        }
    ]
    assert data["tools"] == ["you_mcp_search", "you_mcp_contents"]
    assert data["toolCount"] == 2


@pytest.mark.asyncio
async def test_get_tools(async_client):
    """Test the tools endpoint exposes schema presence, not schemas."""
    response = await async_client.get("/api/v1/mcp/tools")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 2
    assert data["tools"][0] == {
        "name": "you_mcp_search",
        "description": "Search the web",
        "hasInputSchema": True,
        "hasOutputSchema": True,
    }
    assert "inputSchema" not in response.text
    assert "properties" not in response.text


@pytest.mark.asyncio
async def test_lifespan_discovers_once(async_client, registry):
    """Test that startup discovery is reused by later requests."""
    await async_client.get("/api/v1/mcp/status")
    await async_client.get("/api/v1/mcp/tools")

    assert registry.count("tools/list") == 1


@pytest.mark.asyncio
async def test_refresh_reloads_tools(async_client, registry):
    """Test that refresh bypasses the cache and picks up new tools."""
    registry.tools["you_mcp"].append({"name": "news"})

    response = await async_client.post("/api/v1/mcp/refresh")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "MCP tools refreshed successfully"
    assert data["toolCount"] == 3
    assert data["tools"] == ["you_mcp_search", "you_mcp_contents", "you_mcp_news"]
    assert registry.count("tools/list") == 2


@pytest.mark.asyncio
async def test_refresh_with_registry_down_installs_fallback(async_client, registry):
    """Test that a failing registry leaves the fallback tools in place."""
    registry.list_status = 503

    response = await async_client.post("/api/v1/mcp/refresh")

    assert response.status_code == 200
    assert response.json()["tools"] == ["web_search", "web_fetch"]

    status = (await async_client.get("/api/v1/mcp/status")).json()
    assert status["toolCount"] == 2


@pytest.mark.asyncio
async def test_refresh_unexpected_failure_returns_500(async_client, test_app):
    """Test that unexpected refresh errors map to a 500 without internals."""
    test_app.state.tool_catalog.refresh = AsyncMock(side_effect=RuntimeError("boom"))

    response = await async_client.post("/api/v1/mcp/refresh")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to refresh MCP tools"}


@pytest.mark.asyncio
async def test_endpoints_without_catalog_return_503(async_client, test_app):
    """Test that MCP endpoints report an unavailable catalog."""
    delattr(test_app.state, "tool_catalog")

    response = await async_client.get("/api/v1/mcp/status")

    assert response.status_code == 503
    assert response.json()["detail"] == "Tool catalog not initialized"


@pytest.mark.asyncio
async def test_mcp_disabled(registry):
    """Test that a disabled registry yields an empty catalog, not an error."""
    settings = ToolhubSettings(registry_host="https://registry.test", enabled=False)
    app = create_app(settings=settings, registry_transport=registry.transport)

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            status = (await client.get("/api/v1/mcp/status")).json()
            tools = (await client.get("/api/v1/mcp/tools")).json()

    assert status == {"enabled": False, "connections": [], "tools": [], "toolCount": 0}
    assert tools == {"tools": [], "count": 0}
    assert registry.requests == []
