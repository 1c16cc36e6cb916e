"""
MCP server factory: publishes the tool registry and routes tool calls.
"""

from __future__ import annotations

from typing import Any

import mcp.types as types
from mcp.server.lowlevel.server import Server

from llamacloud_mcp import __version__
from llamacloud_mcp.mcp_server.errors import ToolCallError
from llamacloud_mcp.mcp_server.router import RequestRouter
from llamacloud_mcp.mcp_server.tool_registry import ToolRegistry
from llamacloud_mcp.shared.observability import get_logger, new_correlation_id

logger = get_logger(__name__)

SERVER_NAME = "llamacloud-mcp-server"

_instructions = (
    "Each get_information_* tool queries one LlamaCloud knowledge index. "
    "Pick the tool whose description matches the question and pass a "
    "natural-language query."
)


def build_mcp_server(registry: ToolRegistry, router: RequestRouter) -> Server:
    server = Server(SERVER_NAME, version=__version__, instructions=_instructions)
    tools = registry.list_tools()

    @server.list_tools()
    async def _list_tools():
        return list(tools)

    # Query validation belongs to the router, so skip SDK schema validation
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any] | None):
        new_correlation_id()
        logger.info("tool_call_received", tool_name=name)
        try:
            result = await router.handle(name, arguments or {})
        except ToolCallError as exc:
            logger.warning("tool_call_failed", tool_name=name, code=exc.code)
            raise
        return [types.TextContent(type="text", text=result["content"])]

    return server
