"""Health check endpoint router."""

import logging

from fastapi import APIRouter, Request

from mcp_toolhub.models.health import HealthResponse
from mcp_toolhub.tools import ToolCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns the current health status and version of mcp-toolhub, plus the
    tool catalog state if the catalog is set up. Registry availability never
    makes the service unhealthy.

    Args:
        request: The FastAPI request object.

    Returns:
        HealthResponse: Health status and version information.
    """
    mcp_enabled = None
    tool_count = None

    if hasattr(request.app.state, "tool_catalog"):
        catalog: ToolCatalog = request.app.state.tool_catalog
        mcp_enabled = catalog.enabled
        tool_count = len(catalog.list_tool_names())
        logger.debug(f"Tool catalog: enabled={mcp_enabled}, tools={tool_count}")

    return HealthResponse(
        status="ok",
        version="0.1.0",
        mcp_enabled=mcp_enabled,
        tool_count=tool_count,
    )
