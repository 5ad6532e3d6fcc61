"""Health check response model."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint.

    Attributes:
        status: Health status indicator ("ok" or "error").
        version: The version of mcp-toolhub.
        mcp_enabled: Whether MCP tools are enabled (None if the catalog is not set up).
        tool_count: Number of tools in the catalog (None if the catalog is not set up).
    """

    status: str = Field(..., description="Health status of the service")
    version: str = Field(..., description="Version of mcp-toolhub")
    mcp_enabled: bool | None = Field(
        default=None,
        description="Whether MCP tools are enabled",
    )
    tool_count: int | None = Field(
        default=None,
        description="Number of tools currently in the catalog",
    )
