"""MCP router for tool catalog status, details, and refresh.

Authorization is left to the deployment (reverse proxy or upstream registry).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from mcp_toolhub.dependencies import get_tool_catalog
from mcp_toolhub.models.mcp import (
    McpStatusResponse,
    RefreshResponse,
    ToolDetailsResponse,
)
from mcp_toolhub.tools import ToolCatalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/mcp", tags=["mcp"])


@router.get("/status", response_model=McpStatusResponse)
async def get_status(
    catalog: ToolCatalog = Depends(get_tool_catalog),
) -> McpStatusResponse:
    """Get MCP status and available tool names.

    Args:
        catalog: The tool catalog (injected).

    Returns:
        McpStatusResponse: Enabled flag, enabled connections, and tool names.

    Raises:
        HTTPException: 500 if the status cannot be assembled.
    """
    try:
        return McpStatusResponse.model_validate(catalog.status())
    except Exception as e:
        logger.error(f"Failed to get MCP status: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to get MCP status",
        )


@router.get("/tools", response_model=ToolDetailsResponse)
async def list_tools(
    catalog: ToolCatalog = Depends(get_tool_catalog),
) -> ToolDetailsResponse:
    """Get details about the available tools.

    Only the presence of input/output schemas is reported, never the
    schemas themselves.

    Args:
        catalog: The tool catalog (injected).

    Returns:
        ToolDetailsResponse: Tool names, descriptions, and schema flags.

    Raises:
        HTTPException: 500 if the details cannot be assembled.
    """
    try:
        return ToolDetailsResponse.model_validate(catalog.tool_details())
    except Exception as e:
        logger.error(f"Failed to get MCP tools: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to get MCP tools",
        )


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_tools(
    catalog: ToolCatalog = Depends(get_tool_catalog),
) -> RefreshResponse:
    """Refresh MCP tools from the registry.

    Clears the discovery cache and reloads every enabled connection.

    Args:
        catalog: The tool catalog (injected).

    Returns:
        RefreshResponse: Refresh outcome with the new tool names.

    Raises:
        HTTPException: 500 if the refresh fails unexpectedly.
    """
    try:
        summary = await catalog.refresh()
        logger.info(f"Refreshed MCP tools: {summary['toolCount']} available")
        return RefreshResponse.model_validate(summary)
    except Exception as e:
        logger.error(f"Failed to refresh MCP tools: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to refresh MCP tools",
        )
