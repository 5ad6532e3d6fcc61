"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
"""

from mcp_toolhub.routers import health, mcp

__all__ = [
    "health",
    "mcp",
]
