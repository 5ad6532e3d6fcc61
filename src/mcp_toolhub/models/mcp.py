"""Pydantic models for the MCP endpoints.

Field names are serialized in camelCase (toolCount, hasInputSchema, ...) to
match what chat frontends expect. Tool schemas are deliberately absent: only
their presence is reported.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class McpConnectionInfo(_CamelModel):
    """A configured connection as reported by the status endpoint."""

    name: str = Field(description="Connection name")
    description: str = Field(default="", description="Human-readable description")
    type: str = Field(description="Connection type (external, system)")
    enabled: bool = Field(description="Whether the connection is enabled")


class McpStatusResponse(_CamelModel):
    """Response body for GET /api/v1/mcp/status."""

    enabled: bool = Field(description="Whether MCP is enabled")
    connections: list[McpConnectionInfo] = Field(
        default_factory=list,
        description="Enabled connections",
    )
    tools: list[str] = Field(
        default_factory=list,
        description="Names of the available tools",
    )
    tool_count: int = Field(description="Number of available tools")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "enabled": True,
                "connections": [
                    {
                        "name": "you_mcp",
                        "description": "Remote MCP server for web search",
                        "type": "external",
                        "enabled": True,
                    }
                ],
                "tools": ["you_mcp_search", "you_mcp_contents"],
                "toolCount": 2,
            }
        }
    )


class ToolDetail(_CamelModel):
    """Public description of a tool."""

    name: str = Field(description="Qualified tool name")
    description: str = Field(description="Tool description")
    has_input_schema: bool = Field(description="Whether the tool has an input schema")
    has_output_schema: bool = Field(
        description="Whether the tool has an output schema"
    )


class ToolDetailsResponse(_CamelModel):
    """Response body for GET /api/v1/mcp/tools."""

    tools: list[ToolDetail] = Field(default_factory=list)
    count: int = Field(description="Number of tools")


class RefreshResponse(_CamelModel):
    """Response body for POST /api/v1/mcp/refresh."""

    success: bool
    message: str
    tool_count: int
    tools: list[str] = Field(default_factory=list)
