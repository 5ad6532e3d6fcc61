"""MCP registry client and integration layer.

This package provides the async client used to discover and call tools on
remote MCP registries. All registry interactions are async and discovery
results are cached per source.
"""

from mcp_toolhub.mcp.client import McpClient, StaticTokenProvider, TokenProvider
from mcp_toolhub.mcp.types import CacheEntry, ToolDescriptor

__all__ = [
    "CacheEntry",
    "McpClient",
    "StaticTokenProvider",
    "TokenProvider",
    "ToolDescriptor",
]
