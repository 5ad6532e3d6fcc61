"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mcp_toolhub.config import ToolhubSettings, get_enabled_connections, log_configuration
from mcp_toolhub.mcp import McpClient
from mcp_toolhub.routers import health, mcp
from mcp_toolhub.tools import ToolCatalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The MCP client and the tool catalog are created once at startup and
    stored in app.state for reuse across all requests. The catalog is
    initialized before the app starts serving; an unreachable registry only
    leaves it with the fallback tools.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: ToolhubSettings = app.state.settings
    log_configuration(settings)

    app.state.mcp_client = McpClient.from_settings(
        settings, transport=app.state.registry_transport
    )
    app.state.tool_catalog = ToolCatalog(
        client=app.state.mcp_client,
        connections_provider=partial(get_enabled_connections, settings),
        primary_source=settings.primary_source,
    )

    await app.state.tool_catalog.initialize()
    logger.info(
        f"Tool catalog ready with {len(app.state.tool_catalog.list_tool_names())} tools"
    )

    yield

    # Shutdown: Clean up resources
    if hasattr(app.state, "mcp_client"):
        await app.state.mcp_client.close()
        logger.info("MCP client closed")


def create_app(
    settings: ToolhubSettings | None = None,
    registry_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied. It can accept an optional
    settings object for testing or explicit configuration.

    Args:
        settings: Optional ToolhubSettings instance. If not provided,
                  settings will be loaded from environment variables.
        registry_transport: Optional httpx transport for registry calls
                  (lets tests point the app at a fake registry).

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from mcp_toolhub.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="mcp-toolhub",
        description="Tool catalog service exposing MCP registry tools to chat models",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings
    app.state.registry_transport = registry_transport

    # Configure CORS
    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(mcp.router)

    return app
