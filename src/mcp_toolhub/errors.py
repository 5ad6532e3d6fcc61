"""Exception taxonomy for mcp-toolhub.

Discovery problems are degraded (logged and collapsed to an empty tool list),
invocation problems are raised to the caller, who is expected to turn them
into structured tool output.
"""


class ToolhubError(Exception):
    """Base class for all mcp-toolhub errors."""


class DiscoveryDegradation(ToolhubError):
    """Listing tools from a source failed.

    Raised internally by the MCP client and never propagated past
    McpClient.discover_tools(), which converts it into an empty list.

    Attributes:
        source_id: The connection the discovery was issued against
        reason: Human-readable description of what went wrong
    """

    def __init__(self, source_id: str, reason: str) -> None:
        super().__init__(f"Discovery from {source_id} degraded: {reason}")
        self.source_id = source_id
        self.reason = reason


class InvocationError(ToolhubError):
    """Calling a tool on a source failed.

    Attributes:
        source_id: The connection the call was issued against
        tool_name: Name of the tool as known by the source
        status_code: Upstream HTTP status, or None for transport failures
        message: Upstream (or transport) error message
    """

    def __init__(
        self,
        source_id: str,
        tool_name: str,
        status_code: int | None,
        message: str,
    ) -> None:
        super().__init__(message)
        self.source_id = source_id
        self.tool_name = tool_name
        self.status_code = status_code
        self.message = message
