"""Configuration module for mcp-toolhub using pydantic-settings."""

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONNECTION_DESCRIPTION = (
    "Remote MCP server for web search, content fetching, and real-time information"
)


class McpConnection(BaseModel):
    """A configured MCP source (tool registry connection).

    Attributes:
        name: Unique connection name, also used in the registry endpoint path
        description: Human-readable description
        enabled: Whether tools should be loaded from this connection
        type: Connection type ("external" or "system")
        config: Opaque per-connection options
    """

    name: str
    description: str = ""
    enabled: bool = True
    type: Literal["external", "system"] = "external"
    config: dict[str, Any] = Field(default_factory=dict)


class ToolhubSettings(BaseSettings):
    """Main configuration settings for mcp-toolhub.

    All settings can be overridden via environment variables with the MCP_ prefix.
    For example, MCP_REGISTRY_HOST will override the registry_host setting and
    MCP_ENABLED=false disables remote tools altogether.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Tool registry
    registry_host: str = "http://localhost:8080"
    base_path: str = "/api/2.0/mcp"
    token: str = ""

    # MCP
    enabled: bool = True
    primary_source: str = "you_mcp"
    max_results: int = 10
    timeout_seconds: float = 30.0
    cache_ttl_seconds: float = 300.0

    # Explicit connection list (JSON in MCP_CONNECTIONS); defaults to the
    # primary source only
    connections: list[McpConnection] | None = None

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MCP_")

    @property
    def resolved_connections(self) -> list[McpConnection]:
        """Get all configured connections, enabled or not."""
        if self.connections is not None:
            return list(self.connections)

        return [
            McpConnection(
                name=self.primary_source,
                description=DEFAULT_CONNECTION_DESCRIPTION,
                enabled=self.enabled,
                type="external",
                config={
                    "maxResults": self.max_results,
                    "timeout": self.timeout_seconds,
                },
            )
        ]


def get_enabled_connections(settings: ToolhubSettings) -> list[McpConnection]:
    """Get the enabled connections, in configuration order.

    Returns an empty list when MCP is switched off globally.
    """
    if not settings.enabled:
        return []
    return [conn for conn in settings.resolved_connections if conn.enabled]


def is_mcp_enabled(settings: ToolhubSettings) -> bool:
    """Check if MCP is enabled globally and has at least one usable connection."""
    return settings.enabled and len(get_enabled_connections(settings)) > 0


def get_connection(settings: ToolhubSettings, name: str) -> McpConnection | None:
    """Get a configured connection by name."""
    for conn in settings.resolved_connections:
        if conn.name == name:
            return conn
    return None


def log_configuration(settings: ToolhubSettings) -> None:
    """Log the MCP configuration on startup."""
    if not is_mcp_enabled(settings):
        logger.info("MCP is disabled")
        return

    logger.info("MCP is enabled with the following connections:")
    for conn in get_enabled_connections(settings):
        logger.info(f"  - {conn.name}: {conn.description} ({conn.type})")

    disabled = [conn for conn in settings.resolved_connections if not conn.enabled]
    if disabled:
        logger.info("Disabled connections:")
        for conn in disabled:
            logger.info(f"  - {conn.name}: {conn.description}")
