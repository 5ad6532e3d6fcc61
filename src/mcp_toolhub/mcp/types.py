"""Type definitions for the MCP registry integration.

This module contains the models used for representing tool descriptors
received from a registry and the cache entries holding them.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """A tool as advertised by a registry in a tools/list response.

    Attributes:
        name: Tool name, unique within its source
        description: Optional human-readable description
        input_schema: Optional JSON-Schema-like parameter description
    """

    name: str = Field(min_length=1)
    description: str | None = None
    input_schema: dict[str, Any] | None = Field(default=None, alias="inputSchema")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


@dataclass
class CacheEntry:
    """Discovered tools for one source with expiration tracking.

    Attributes:
        source_id: The connection the tools were discovered from
        tools: Descriptors in discovery order
        expires_at: Clock reading after which the entry is stale
    """

    source_id: str
    tools: tuple[ToolDescriptor, ...]
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at
