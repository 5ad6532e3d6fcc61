"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API responses across all endpoints.
"""

from mcp_toolhub.models.health import HealthResponse
from mcp_toolhub.models.mcp import (
    McpConnectionInfo,
    McpStatusResponse,
    RefreshResponse,
    ToolDetail,
    ToolDetailsResponse,
)

__all__ = [
    "HealthResponse",
    "McpConnectionInfo",
    "McpStatusResponse",
    "RefreshResponse",
    "ToolDetail",
    "ToolDetailsResponse",
]
