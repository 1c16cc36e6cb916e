"""
Tool registry: derived tool names and the discovery payload.

The registry is pure metadata projection. It is built once at startup from
parsed ToolDefinitions and never mutated afterwards.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import mcp.types as types

from llamacloud_mcp.mcp_server.errors import DuplicateToolNameError, NoDefinitionsError
from llamacloud_mcp.shared.observability import get_logger

logger = get_logger(__name__)

TOOL_NAME_PREFIX = "get_information_"

QUERY_INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "The query used to get information about your knowledge base.",
        },
    },
    "required": ["query"],
}

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


def slugify_index_name(index_name: str) -> str:
    """Lower-case and replace every character outside [a-z0-9] with '_'."""
    return _NON_SLUG_CHARS.sub("_", index_name.lower())


def derive_tool_name(index_name: str) -> str:
    return f"{TOOL_NAME_PREFIX}{slugify_index_name(index_name)}"


@dataclass(frozen=True)
class ToolDefinition:
    """One requested knowledge index, exposed as one MCP tool."""

    index_name: str
    description: str
    similarity_top_k: Optional[int] = None

    @property
    def tool_name(self) -> str:
        return derive_tool_name(self.index_name)

    @property
    def tool_description(self) -> str:
        return (
            f"Get information from the '{self.index_name}' knowledge base. "
            f"{self.description}"
        )


class ToolRegistry:
    """
    Ordered, read-only catalog of tool definitions keyed by tool name.

    Raises:
        NoDefinitionsError: If no definitions are given
        DuplicateToolNameError: If two index names derive the same tool name
    """

    def __init__(self, definitions: Sequence[ToolDefinition]):
        if not definitions:
            raise NoDefinitionsError()

        tools: Dict[str, ToolDefinition] = {}
        for definition in definitions:
            existing = tools.get(definition.tool_name)
            if existing is not None:
                raise DuplicateToolNameError(
                    definition.tool_name, definition.index_name, existing.index_name
                )
            tools[definition.tool_name] = definition

        self._tools = tools
        self._annotations = types.ToolAnnotations(
            readOnlyHint=True,
            openWorldHint=True,
            idempotentHint=True,
            destructiveHint=False,
        )
        logger.debug("tool_registry_built", tool_count=len(tools))

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self):
        return iter(self._tools.values())

    @property
    def definitions(self) -> List[ToolDefinition]:
        return list(self._tools.values())

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def by_name(self, tool_name: str) -> Optional[ToolDefinition]:
        return self._tools.get(tool_name)

    def discovery_payload(self) -> List[Dict[str, Any]]:
        """Tool descriptors in definition order, as plain dicts."""
        return [
            {
                "name": definition.tool_name,
                "description": definition.tool_description,
                "inputSchema": copy.deepcopy(QUERY_INPUT_SCHEMA),
            }
            for definition in self._tools.values()
        ]

    def list_tools(self) -> List[types.Tool]:
        return [
            types.Tool(
                name=entry["name"],
                description=entry["description"],
                inputSchema=entry["inputSchema"],
                annotations=self._annotations,
            )
            for entry in self.discovery_payload()
        ]
