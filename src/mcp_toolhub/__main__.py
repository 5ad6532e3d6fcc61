"""CLI entry point for mcp-toolhub.

This module provides the command-line interface for starting the mcp-toolhub
server. It can be invoked as `mcp-toolhub` (via the script entry point) or
`python -m mcp_toolhub`. With --check-endpoint it lists the tools of the
primary source once and reports whether the registry is reachable, and with
--check-query it also runs one web search through that source.
"""

import argparse
import asyncio
import json
import sys

import uvicorn

from mcp_toolhub import __version__, create_app
from mcp_toolhub.config import ToolhubSettings
from mcp_toolhub.errors import InvocationError
from mcp_toolhub.mcp import McpClient


async def check_endpoint(settings: ToolhubSettings, query: str | None = None) -> int:
    """List the primary source's tools once and print the outcome.

    Args:
        settings: Settings pointing at the registry to check.
        query: If given, also call web_search with this query once tools
            were found.

    Returns:
        int: Process exit code (0 if every check passed, 1 otherwise).
    """
    client = McpClient.from_settings(settings)
    source_id = settings.primary_source
    try:
        print(f"Testing MCP endpoint: {client.endpoint_url(source_id)}")

        if not await client.check_connection(source_id):
            print("MCP endpoint is not accessible")
            return 1

        tools = await client.discover_tools(source_id)
        print(f"MCP endpoint is accessible, {len(tools)} tools available")
        for tool in tools:
            print(f"  - {tool.name}: {tool.description or ''}")

        if query is None:
            return 0
        if not tools:
            print("Skipping web search check, no tools available")
            return 0

        try:
            result = await client.invoke_tool(
                source_id, "web_search", {"query": query, "maxResults": 3}
            )
        except InvocationError as e:
            print(f"Web search failed: {e.message}")
            return 1
        print("Web search executed successfully")
        print(json.dumps(result, indent=2, default=str))
        return 0
    finally:
        await client.close()


def main() -> int:
    """Main entry point for the mcp-toolhub CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="mcp-toolhub",
        description="Tool catalog service exposing MCP registry tools to chat models",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mcp-toolhub {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via MCP_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via MCP_PORT)",
    )

    parser.add_argument(
        "--registry-host",
        type=str,
        default=None,
        help="MCP registry URL (can be set via MCP_REGISTRY_HOST)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via MCP_LOG_LEVEL)",
    )

    parser.add_argument(
        "--check-endpoint",
        action="store_true",
        help="Check that the primary source is reachable and list its tools, then exit",
    )

    parser.add_argument(
        "--check-query",
        type=str,
        default=None,
        help="With --check-endpoint, also run one web_search with this query",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.registry_host is not None:
        settings_kwargs["registry_host"] = args.registry_host
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = ToolhubSettings(**settings_kwargs)

    if args.check_endpoint:
        return asyncio.run(check_endpoint(settings, args.check_query))

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
