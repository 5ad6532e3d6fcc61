"""Tool abstractions shared by remote and fallback tools."""

import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from mcp_toolhub.mcp.types import ToolDescriptor
from mcp_toolhub.tools.schema import ValidatedSchema, translate

if TYPE_CHECKING:
    from mcp_toolhub.mcp.client import McpClient

logger = logging.getLogger(__name__)

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_]")


def qualified_name(source_id: str, tool_name: str) -> str:
    """Build the catalog-wide tool name for a tool of a source.

    Every character outside [A-Za-z0-9_] is replaced by an underscore, so
    the result is usable as a function name by model runtimes.

    Example:
        >>> qualified_name("you mcp!", "web-search")
        'you_mcp__web_search'
    """
    return _INVALID_NAME_CHARS.sub("_", f"{source_id}_{tool_name}")


class BaseTool(ABC):
    """A tool the conversational runtime can call.

    Attributes:
        name: Catalog-unique tool name
        description: Description shown to the model
        input_schema: Schema the arguments are validated against
        output_schema: Schema describing the result (permissive by default)
    """

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: ValidatedSchema,
        output_schema: ValidatedSchema | None = None,
    ) -> None:
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.output_schema = output_schema or ValidatedSchema.permissive()

    @property
    def has_input_schema(self) -> bool:
        return self.input_schema is not None

    @property
    def has_output_schema(self) -> bool:
        return self.output_schema is not None

    async def invoke(self, arguments: Any = None) -> Any:
        """Validate the arguments and execute the tool.

        Raises:
            pydantic.ValidationError: If the arguments do not match input_schema
            InvocationError: If the underlying call fails (remote tools only)
        """
        validated = self.input_schema.validate(arguments if arguments is not None else {})
        return await self.execute(validated)

    @abstractmethod
    async def execute(self, arguments: Any) -> Any:
        """Run the tool with already validated arguments."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class RemoteTool(BaseTool):
    """A tool discovered from a registry source.

    Calls are forwarded to the registry under the tool's original name.
    """

    def __init__(
        self,
        descriptor: ToolDescriptor,
        source_id: str,
        client: "McpClient",
    ) -> None:
        super().__init__(
            name=qualified_name(source_id, descriptor.name),
            description=descriptor.description or f"MCP tool: {descriptor.name}",
            input_schema=translate(descriptor.input_schema),
        )
        self.source_id = source_id
        self.tool_name = descriptor.name
        self._client = client

    async def execute(self, arguments: Any) -> Any:
        return await self._client.invoke_tool(self.source_id, self.tool_name, arguments)
