"""mcp-toolhub: Tool catalog service for chat models backed by MCP registries.

This package discovers tools from remote MCP registries, translates their
parameter schemas, caches discovery results, and falls back to built-in web
tools when the registry has nothing to offer.
"""

from mcp_toolhub.app import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
