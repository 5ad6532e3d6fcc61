"""Pytest configuration for integration tests.

The fake registry starts out offering two tools on the primary source, so
the app's lifespan initializes the catalog with remote tools.
"""

import pytest


@pytest.fixture
def registry(registry):
    """Extend the shared fake registry with tools on the primary source."""
    registry.tools["you_mcp"] = [
        {
            "name": "search",
            "description": "Search the web",
            "inputSchema": {
                "type": "object",
                "properties": {"query": {"type": "string"}},
                "required": ["query"],
            },
        },
        {"name": "contents", "description": "Fetch page contents"},
    ]
    return registry
