"""Async MCP registry client.

This module provides an async client for discovering and calling tools on a
remote MCP registry over JSON request/response messaging. The client is
designed to be created once at startup and reused; it owns a per-source cache
of discovered tools.
"""

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from mcp_toolhub.config import ToolhubSettings
from mcp_toolhub.errors import DiscoveryDegradation, InvocationError
from mcp_toolhub.mcp.types import CacheEntry, ToolDescriptor

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str]]

DEFAULT_CACHE_TTL_SECONDS = 5 * 60


class StaticTokenProvider:
    """Token provider returning a fixed bearer token."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def __call__(self) -> str:
        return self._token


class McpClient:
    """Async client for a remote MCP tool registry.

    Every source (connection) is reachable at
    ``<registry_host><base_path>/external/<source_id>`` and accepts POSTed
    ``tools/list`` and ``tools/call`` requests.

    Discovery never raises: any failure is logged and yields an empty list,
    so that an unavailable registry degrades capabilities instead of chat
    availability. Invocation failures are raised as InvocationError.

    Attributes:
        registry_host: Base URL of the registry (e.g., "https://registry.example.com")
        base_path: Path prefix of the MCP endpoints
        timeout_seconds: Duration budget for every registry call
        cache_ttl_seconds: How long discovered tools are reused
        _client: The underlying httpx.AsyncClient instance
    """

    def __init__(
        self,
        registry_host: str,
        token_provider: TokenProvider,
        *,
        base_path: str = "/api/2.0/mcp",
        timeout_seconds: float = 30.0,
        cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the MCP client.

        Args:
            registry_host: Base URL of the registry
            token_provider: Async callable returning the bearer token
            base_path: Path prefix of the MCP endpoints
            timeout_seconds: Duration budget for every registry call
            cache_ttl_seconds: How long discovered tools are reused
            transport: Optional httpx transport (used by tests)
            clock: Monotonic clock used for cache expiry
        """
        self.registry_host = registry_host.rstrip("/")
        self.base_path = "/" + base_path.strip("/")
        self.timeout_seconds = timeout_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self._token_provider = token_provider
        self._clock = clock
        self._cache: dict[str, CacheEntry] = {}
        self._client = httpx.AsyncClient(transport=transport, timeout=timeout_seconds)
        logger.info(f"McpClient initialized with registry: {self.registry_host}")

    @classmethod
    def from_settings(
        cls,
        settings: ToolhubSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "McpClient":
        """Create a client from application settings."""
        return cls(
            registry_host=settings.registry_host,
            token_provider=StaticTokenProvider(settings.token),
            base_path=settings.base_path,
            timeout_seconds=settings.timeout_seconds,
            cache_ttl_seconds=settings.cache_ttl_seconds,
            transport=transport,
        )

    def endpoint_url(self, source_id: str) -> str:
        """Get the registry endpoint for a source."""
        return f"{self.registry_host}{self.base_path}/external/{source_id}"

    async def _post(self, source_id: str, body: dict[str, Any]) -> httpx.Response:
        # The token is requested per call and never stored
        token = await self._token_provider()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        return await self._client.post(
            self.endpoint_url(source_id),
            json=body,
            headers=headers,
            timeout=self.timeout_seconds,
        )

    async def check_connection(self, source_id: str) -> bool:
        """Check if a source is reachable and answers tools/list.

        Returns:
            bool: True if the registry responded with a success status
        """
        try:
            response = await self._post(source_id, {"method": "tools/list"})
            logger.debug(
                f"MCP connection check for {source_id}: {response.status_code}"
            )
            return response.is_success
        except Exception as e:
            logger.warning(f"MCP connection check for {source_id} failed: {e}")
            return False

    async def discover_tools(self, source_id: str) -> list[ToolDescriptor]:
        """List the tools offered by a source.

        Returns the cached list while it is fresh. Otherwise the registry is
        asked again; on failure an empty list is returned and nothing is
        cached (a stale entry is dropped rather than served).

        Args:
            source_id: The connection to list tools from

        Returns:
            list[ToolDescriptor]: Discovered tools, in registry order
        """
        entry = self._cache.get(source_id)
        if entry is not None and entry.is_fresh(self._clock()):
            logger.debug(f"Using cached tools for {source_id}")
            return list(entry.tools)

        self._cache.pop(source_id, None)

        try:
            tools = await self._fetch_tools(source_id)
        except DiscoveryDegradation as e:
            logger.warning(f"{e}; returning empty tool list")
            return []

        self._cache[source_id] = CacheEntry(
            source_id=source_id,
            tools=tuple(tools),
            expires_at=self._clock() + self.cache_ttl_seconds,
        )
        logger.info(f"Cached {len(tools)} tools for {source_id}")
        return tools

    async def _fetch_tools(self, source_id: str) -> list[ToolDescriptor]:
        """Fetch the tool list from the registry.

        Raises:
            DiscoveryDegradation: On transport errors, non-success status
                or a malformed response body
        """
        logger.info(f"Fetching tools from {self.endpoint_url(source_id)}")

        try:
            response = await self._post(source_id, {"method": "tools/list"})
        except httpx.TimeoutException as e:
            raise DiscoveryDegradation(source_id, "request timed out") from e
        except Exception as e:
            raise DiscoveryDegradation(source_id, f"transport failure: {e}") from e

        if not response.is_success:
            logger.debug(f"Discovery response for {source_id}: {response.text}")
            raise DiscoveryDegradation(source_id, f"status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise DiscoveryDegradation(source_id, "response is not valid JSON") from e

        logger.debug(f"Tools response for {source_id}: {data}")

        if isinstance(data, Mapping) and isinstance(data.get("tools"), list):
            raw_tools = data["tools"]
        elif isinstance(data, list):
            raw_tools = data
        elif isinstance(data, Mapping) and data.get("error"):
            raise DiscoveryDegradation(source_id, f"registry error: {data['error']}")
        else:
            raise DiscoveryDegradation(source_id, "unexpected response shape")

        try:
            return [ToolDescriptor.model_validate(item) for item in raw_tools]
        except ValidationError as e:
            raise DiscoveryDegradation(
                source_id, f"malformed tool descriptor ({e.error_count()} errors)"
            ) from e

    async def invoke_tool(
        self,
        source_id: str,
        tool_name: str,
        arguments: Mapping[str, Any] | None = None,
    ) -> Any:
        """Call a tool on a source.

        Args:
            source_id: The connection that offers the tool
            tool_name: The tool's name as known by the source
            arguments: Tool arguments (defaults to an empty object)

        Returns:
            Any: The response's "result" if present, else its "content",
                 else the whole response body

        Raises:
            InvocationError: On transport failure, non-success status or a
                non-JSON response body
        """
        body = {
            "method": "tools/call",
            "params": {
                "name": tool_name,
                "arguments": arguments if arguments is not None else {},
            },
        }
        logger.info(f"Calling tool {tool_name} on {source_id}")
        logger.debug(f"Request body: {body}")

        try:
            response = await self._post(source_id, body)
        except httpx.TimeoutException as e:
            logger.error(f"Tool call {tool_name} on {source_id} timed out")
            raise InvocationError(source_id, tool_name, None, "Tool call timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Tool call {tool_name} on {source_id} failed: {e}")
            raise InvocationError(
                source_id, tool_name, None, f"Tool call failed: {e}"
            ) from e

        if not response.is_success:
            logger.error(
                f"Tool call {tool_name} failed, status: {response.status_code}, "
                f"response: {response.text}"
            )
            raise InvocationError(
                source_id,
                tool_name,
                response.status_code,
                f"Tool call failed: {_upstream_message(response)}",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise InvocationError(
                source_id,
                tool_name,
                response.status_code,
                "Tool call failed: response is not valid JSON",
            ) from e

        logger.debug(f"Tool response: {data}")

        if isinstance(data, Mapping):
            if "result" in data:
                return data["result"]
            if data.get("content"):
                return data["content"]
        return data

    def invalidate(self, source_id: str | None = None) -> None:
        """Clear cached tools for one source, or for all sources."""
        if source_id is None:
            self._cache.clear()
            logger.info("MCP tool cache cleared")
        else:
            self._cache.pop(source_id, None)
            logger.info(f"MCP tool cache cleared for {source_id}")

    def cached_sources(self) -> list[str]:
        """Get the sources that currently hold a fresh cache entry."""
        now = self._clock()
        return [
            source_id
            for source_id, entry in self._cache.items()
            if entry.is_fresh(now)
        ]

    async def close(self) -> None:
        """Close the client and release the HTTP connection pool."""
        await self._client.aclose()
        logger.debug("McpClient closed")


def _upstream_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, Mapping):
        for key in ("error", "message"):
            if isinstance(data.get(key), str) and data[key]:
                return data[key]
    return response.reason_phrase or f"HTTP {response.status_code}"
