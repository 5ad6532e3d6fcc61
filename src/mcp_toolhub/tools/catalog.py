"""Tool catalog aggregating remote and fallback tools.

The catalog is created once at startup and shared by every consumer. It
discovers tools from every enabled connection, translates them, and keeps
them keyed by qualified name. Readers get snapshots; the initialize/refresh
writers always swap in a fully built mapping.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from mcp_toolhub.config import McpConnection
from mcp_toolhub.mcp.client import McpClient
from mcp_toolhub.tools.base import BaseTool, RemoteTool
from mcp_toolhub.tools.fallback import create_fallback_tools

logger = logging.getLogger(__name__)

ConnectionsProvider = Callable[[], list[McpConnection]]


class ToolCatalog:
    """Process-wide registry of the tools offered to the model.

    Attributes:
        primary_source: Connection whose empty discovery installs fallback tools
    """

    def __init__(
        self,
        client: McpClient,
        connections_provider: ConnectionsProvider,
        primary_source: str = "you_mcp",
    ) -> None:
        """Initialize an empty, uninitialized catalog.

        Args:
            client: MCP client used for discovery and invocation
            connections_provider: Returns the currently enabled connections;
                evaluated before every initialize/refresh
            primary_source: Name of the connection backing the fallback tools
        """
        self.primary_source = primary_source
        self._client = client
        self._connections_provider = connections_provider
        self._tools: dict[str, BaseTool] = {}
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def enabled(self) -> bool:
        """Whether MCP is enabled with at least one usable connection."""
        return len(self._connections_provider()) > 0

    async def initialize(self, sources: Sequence[McpConnection] | None = None) -> None:
        """Load tools from all enabled sources.

        Does nothing if the catalog is already initialized. Never raises: a
        failing source is skipped, and if it is the primary source the
        fallback tools are installed in its place.

        Args:
            sources: Connections to load from; defaults to the currently
                enabled connections from the provider
        """
        async with self._lock:
            if self._initialized:
                logger.info("Tool catalog already initialized")
                return
            await self._populate(sources)

    async def refresh(self) -> dict[str, Any]:
        """Drop cached discoveries and held tools, then initialize again.

        Returns:
            dict: Summary with success flag, message, tool count and names
        """
        logger.info("Refreshing MCP tools...")
        async with self._lock:
            self._client.invalidate()
            self._tools = {}
            self._initialized = False
            await self._populate(None)

        names = self.list_tool_names()
        return {
            "success": True,
            "message": "MCP tools refreshed successfully",
            "toolCount": len(names),
            "tools": names,
        }

    async def _populate(self, sources: Sequence[McpConnection] | None) -> None:
        # Caller holds the lock
        if sources is None:
            sources = self._connections_provider()

        enabled = [source for source in sources if source.enabled]
        if not enabled:
            logger.info("No enabled MCP connections, tool catalog stays empty")

        tools: dict[str, BaseTool] = {}
        for source in enabled:
            for tool in await self._load_source(source):
                if tool.name in tools:
                    logger.warning(f"Duplicate tool name {tool.name}, replacing")
                tools[tool.name] = tool
                logger.debug(f"Loaded tool: {tool.name}")

        self._tools = tools
        self._initialized = True
        logger.info(f"Tool catalog initialized with {len(tools)} tools")

    async def _load_source(self, source: McpConnection) -> list[BaseTool]:
        logger.info(f"Loading tools from {source.name}...")
        loaded: list[BaseTool] = []
        try:
            descriptors = await self._client.discover_tools(source.name)
            loaded = [
                RemoteTool(descriptor, source.name, self._client)
                for descriptor in descriptors
            ]
        except Exception as e:
            logger.error(f"Failed to load tools from {source.name}: {e}")

        # An empty registry and a failed discovery look the same here; both
        # get the fallback tools
        if not loaded and source.name == self.primary_source:
            logger.info(f"No tools loaded from {source.name}, adding default tools")
            loaded = create_fallback_tools(self._client, self.primary_source)

        return loaded

    def get_tools(self) -> dict[str, BaseTool]:
        """Get a snapshot of all tools keyed by name."""
        if not self._initialized:
            logger.warning("Tool catalog not initialized, returning empty tools")
            return {}
        return dict(self._tools)

    def get_tool(self, name: str) -> BaseTool | None:
        return self._tools.get(name)

    def has_tool(self, name: str) -> bool:
        return name in self._tools

    def list_tool_names(self) -> list[str]:
        """Get tool names in insertion order (sources first, then discovery)."""
        return list(self._tools)

    def status(self) -> dict[str, Any]:
        """Get the MCP status: enabled flag, connections and tool names."""
        connections = self._connections_provider()
        names = self.list_tool_names()
        return {
            "enabled": len(connections) > 0,
            "connections": [
                {
                    "name": conn.name,
                    "description": conn.description,
                    "type": conn.type,
                    "enabled": conn.enabled,
                }
                for conn in connections
            ],
            "tools": names,
            "toolCount": len(names),
        }

    def tool_details(self) -> dict[str, Any]:
        """Describe the available tools without exposing their schemas."""
        details = [
            {
                "name": name,
                "description": tool.description,
                "hasInputSchema": tool.has_input_schema,
                "hasOutputSchema": tool.has_output_schema,
            }
            for name, tool in self.get_tools().items()
        ]
        return {"tools": details, "count": len(details)}
