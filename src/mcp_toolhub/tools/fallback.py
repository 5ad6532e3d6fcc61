"""Built-in fallback tools.

When the primary source yields no tools, web_search and web_fetch are
installed instead so the model keeps a stable capability surface. Both are
thin adapters over McpClient.invoke_tool() against the primary source and
report failures as structured output instead of raising.
"""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mcp_toolhub.tools.base import BaseTool
from mcp_toolhub.tools.schema import ValidatedSchema

if TYPE_CHECKING:
    from mcp_toolhub.mcp.client import McpClient

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WebSearchInput(_CamelModel):
    query: str = Field(description="The search query")
    max_results: int | float = Field(
        default=10, description="Maximum number of results to return"
    )


class SearchResult(_CamelModel):
    title: str
    url: str
    snippet: str
    published_date: str | None = None


class WebSearchOutput(_CamelModel):
    results: list[SearchResult]


class WebFetchInput(_CamelModel):
    url: str = Field(description="The URL to fetch")
    extract_text: bool = Field(
        default=True, description="Whether to extract text content"
    )
    summarize: bool = Field(
        default=False, description="Whether to summarize the content"
    )


class WebFetchOutput(_CamelModel):
    title: str | None = None
    content: str
    url: str
    fetched_at: str


class WebSearchTool(BaseTool):
    """Search the web through the primary source."""

    def __init__(self, client: "McpClient", source_id: str) -> None:
        super().__init__(
            name="web_search",
            description="Search the web for current information, news, and recent events",
            input_schema=ValidatedSchema.from_model(WebSearchInput),
            output_schema=ValidatedSchema.from_model(WebSearchOutput),
        )
        self.source_id = source_id
        self._client = client

    async def execute(self, arguments: Any) -> Any:
        logger.info(f"Executing web search: {arguments}")
        try:
            return await self._client.invoke_tool(self.source_id, "web_search", arguments)
        except Exception as e:
            logger.error(f"Web search failed: {e}")
            return {"results": [], "error": str(e) or "Search failed"}


class WebFetchTool(BaseTool):
    """Fetch a web page through the primary source."""

    def __init__(self, client: "McpClient", source_id: str) -> None:
        super().__init__(
            name="web_fetch",
            description="Fetch and analyze content from a web page",
            input_schema=ValidatedSchema.from_model(WebFetchInput),
            output_schema=ValidatedSchema.from_model(WebFetchOutput),
        )
        self.source_id = source_id
        self._client = client

    async def execute(self, arguments: Any) -> Any:
        logger.info(f"Executing web fetch: {arguments}")
        try:
            return await self._client.invoke_tool(self.source_id, "web_fetch", arguments)
        except Exception as e:
            logger.error(f"Web fetch failed: {e}")
            return {
                "content": "",
                "url": arguments.get("url"),
                "fetchedAt": datetime.now(timezone.utc).isoformat(),
                "error": str(e) or "Fetch failed",
            }


def create_fallback_tools(client: "McpClient", source_id: str) -> list[BaseTool]:
    """Create the default tool set bound to the given source."""
    return [WebSearchTool(client, source_id), WebFetchTool(client, source_id)]
