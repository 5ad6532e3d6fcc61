"""Tool catalog, schema translation, and fallback tool layer.

This package turns tools discovered from MCP registries into validated,
invokable tools and keeps them in a shared catalog.
"""

from mcp_toolhub.tools.base import BaseTool, RemoteTool, qualified_name
from mcp_toolhub.tools.catalog import ToolCatalog
from mcp_toolhub.tools.fallback import WebFetchTool, WebSearchTool, create_fallback_tools
from mcp_toolhub.tools.schema import ValidatedSchema, translate

__all__ = [
    "BaseTool",
    "RemoteTool",
    "ToolCatalog",
    "ValidatedSchema",
    "WebFetchTool",
    "WebSearchTool",
    "create_fallback_tools",
    "qualified_name",
    "translate",
]
