"""Bridge between the tool catalog and Ollama tool calling.

Catalog tools are offered to an Ollama chat as function tools, and the tool
calls in an assistant message are executed against the catalog. Every call
produces a tool message; failures are reported as {"error": ...} content so
the model can explain them instead of the chat breaking.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ollama import Message
from pydantic import ValidationError

from mcp_toolhub.errors import InvocationError
from mcp_toolhub.tools.catalog import ToolCatalog

logger = logging.getLogger(__name__)

_EMPTY_PARAMETERS: dict[str, Any] = {"type": "object", "properties": {}}


def to_ollama_tools(catalog: ToolCatalog) -> list[dict[str, Any]]:
    """Render catalog tools as Ollama function tool definitions.

    Returns:
        list[dict]: Entries of the form
            {"type": "function", "function": {"name", "description", "parameters"}}
    """
    tools = []
    for name, tool in catalog.get_tools().items():
        parameters = tool.input_schema.json_schema()
        if parameters.get("type") != "object":
            parameters = dict(_EMPTY_PARAMETERS)
        tools.append(
            {
                "type": "function",
                "function": {
                    "name": name,
                    "description": tool.description,
                    "parameters": parameters,
                },
            }
        )
    return tools


async def execute_tool_calls(
    catalog: ToolCatalog,
    tool_calls: Sequence[Message.ToolCall | Mapping[str, Any]],
) -> list[dict[str, Any]]:
    """Execute the tool calls of an assistant message.

    Args:
        catalog: The tool catalog
        tool_calls: Tool calls from an Ollama message (ollama.Message.ToolCall
                    objects or their dict form)

    Returns:
        list[dict]: One {"role": "tool", "tool_name", "content"} message per
                    call, in call order, with JSON content
    """
    messages = []
    for call in tool_calls:
        name, arguments = _unpack_call(call)
        result = await run_tool(catalog, name, arguments)
        messages.append(
            {
                "role": "tool",
                "tool_name": name,
                "content": json.dumps(result, default=str),
            }
        )
    return messages


async def run_tool(catalog: ToolCatalog, name: str, arguments: Any) -> Any:
    """Run one catalog tool, converting failures into {"error": ...} results."""
    tool = catalog.get_tool(name)
    if tool is None:
        logger.warning(f"Model requested unknown tool: {name}")
        return {"error": f"Tool '{name}' is not available"}

    try:
        return await tool.invoke(arguments)
    except ValidationError as e:
        logger.warning(f"Invalid arguments for tool {name}: {e}")
        return {"error": f"Invalid arguments for tool '{name}': {_describe(e)}"}
    except InvocationError as e:
        return {"error": f"Tool '{name}' failed: {e.message}"}
    except Exception as e:
        logger.exception(f"Tool {name} raised unexpectedly: {e}")
        return {"error": f"Tool '{name}' failed"}


def _unpack_call(call: Message.ToolCall | Mapping[str, Any]) -> tuple[str, Any]:
    if isinstance(call, Message.ToolCall):
        return call.function.name, dict(call.function.arguments)

    function = call.get("function") or {}
    arguments = function.get("arguments") or {}
    if isinstance(arguments, str):
        # OpenAI-style clients send arguments as a JSON string
        try:
            arguments = json.loads(arguments)
        except ValueError:
            arguments = {}
    return str(function.get("name", "")), arguments


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )
