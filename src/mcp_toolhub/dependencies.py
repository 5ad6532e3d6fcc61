"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and services.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from mcp_toolhub.config import ToolhubSettings
from mcp_toolhub.tools import ToolCatalog


@lru_cache
def get_settings() -> ToolhubSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the MCP_ prefix.

    Returns:
        ToolhubSettings: The application configuration settings.
    """
    return ToolhubSettings()


def get_tool_catalog(request: Request) -> ToolCatalog:
    """Get the tool catalog from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        ToolCatalog: The shared tool catalog created at startup.

    Raises:
        HTTPException: If the catalog is not initialized (503 Service Unavailable).
    """
    if not hasattr(request.app.state, "tool_catalog"):
        raise HTTPException(
            status_code=503,
            detail="Tool catalog not initialized",
        )
    return request.app.state.tool_catalog
