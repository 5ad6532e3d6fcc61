"""Unit tests for the health check endpoint."""

import pytest


@pytest.mark.asyncio
async def test_health_check_returns_ok(async_client):
    """Test that health check returns status ok."""
    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_health_check_response_structure(async_client):
    """Test that health check response has correct structure."""
    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert "status" in data
    assert "version" in data
    assert "mcp_enabled" in data
    assert "tool_count" in data


@pytest.mark.asyncio
async def test_health_check_reports_catalog(async_client):
    """Test that health check reports the catalog state."""
    response = await async_client.get("/api/v1/health")

    data = response.json()
    assert data["mcp_enabled"] is True
    # Empty fake registry, so the fallback tools are installed
    assert data["tool_count"] == 2


@pytest.mark.asyncio
async def test_health_check_with_registry_offline(async_client, test_app, registry):
    """Test that an unreachable registry does not make the service unhealthy."""
    registry.offline = True
    await test_app.state.tool_catalog.refresh()

    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["tool_count"] == 2


@pytest.mark.asyncio
async def test_health_check_no_catalog(async_client, test_app):
    """Test health check when the tool catalog is not initialized."""
    if hasattr(test_app.state, "tool_catalog"):
        delattr(test_app.state, "tool_catalog")

    response = await async_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["mcp_enabled"] is None
    assert data["tool_count"] is None
