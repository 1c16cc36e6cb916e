"""
STDIO MCP server entry point.

Startup is strictly sequential: settings and logging, argument parsing, tool
registry, index binding. Only when every step succeeds does the server start
reading requests from stdin.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

import anyio
from mcp.server.lowlevel.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from llamacloud_mcp.mcp_server.arg_spec import parse_tool_definitions
from llamacloud_mcp.mcp_server.errors import ConfigurationError
from llamacloud_mcp.mcp_server.index_binder import bind_indexes
from llamacloud_mcp.mcp_server.mcp_app import build_mcp_server
from llamacloud_mcp.mcp_server.router import RequestRouter
from llamacloud_mcp.mcp_server.tool_registry import ToolRegistry
from llamacloud_mcp.shared.config import get_settings
from llamacloud_mcp.shared.observability import get_logger, setup_logging

logger = get_logger(__name__)


def create_server(argv: Sequence[str]) -> Server:
    """
    Build a fully bound server from command-line tokens.

    Raises:
        ConfigurationError: If no tool can be safely served
    """
    definitions = parse_tool_definitions(argv)
    registry = ToolRegistry(definitions)
    handles = bind_indexes(get_settings(), registry.definitions)
    return build_mcp_server(registry, RequestRouter(handles))


async def run_stdio_server(server: Server) -> None:
    init_options = server.create_initialization_options(
        notification_options=NotificationOptions()
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, init_options)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        sys.exit(1)
    setup_logging(settings.log_level, settings.log_format)

    try:
        server = create_server(args)
    except ConfigurationError as exc:
        logger.error("startup_failed", code=exc.code, error=str(exc))
        sys.exit(1)

    logger.info("Starting LlamaCloud MCP server with STDIO transport")
    try:
        anyio.run(run_stdio_server, server)
    except KeyboardInterrupt:
        logger.info("server_stopped")
    except Exception as exc:
        logger.exception("server_error", error=str(exc), error_type=type(exc).__name__)
        sys.exit(1)


if __name__ == "__main__":
    main()
