"""
Error kinds for startup configuration and per-request tool calls.

Startup errors derive from ConfigurationError and terminate the process.
Per-request errors derive from ToolCallError; the MCP SDK turns them into
``isError`` tool results so the server keeps serving.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIG_MISSING = "CONFIG_MISSING"
    NO_DEFINITIONS = "NO_DEFINITIONS"
    DUPLICATE_TOOL_NAME = "DUPLICATE_TOOL_NAME"
    INCOMPLETE_DEFINITION = "INCOMPLETE_DEFINITION"
    INVALID_TOP_K = "INVALID_TOP_K"
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    MISSING_QUERY = "MISSING_QUERY"
    RETRIEVAL_FAILED = "RETRIEVAL_FAILED"


class ConfigurationError(Exception):
    """Fatal startup error: no tools can be safely served."""

    kind: ErrorKind = ErrorKind.CONFIG_MISSING

    @property
    def code(self) -> str:
        return self.kind.value


class ConfigMissingError(ConfigurationError):
    kind = ErrorKind.CONFIG_MISSING

    def __init__(self, variable: str):
        super().__init__(f"{variable} is not set")
        self.variable = variable


class NoDefinitionsError(ConfigurationError):
    kind = ErrorKind.NO_DEFINITIONS

    def __init__(self, message: str = "No valid tool definitions provided"):
        super().__init__(message)


class DuplicateToolNameError(ConfigurationError):
    kind = ErrorKind.DUPLICATE_TOOL_NAME

    def __init__(self, tool_name: str, index_name: str, existing_index_name: str):
        super().__init__(
            f"Tool name '{tool_name}' derived from index '{index_name}' "
            f"collides with index '{existing_index_name}'"
        )
        self.tool_name = tool_name
        self.index_name = index_name
        self.existing_index_name = existing_index_name


class ToolCallError(Exception):
    """
    Per-request failure.

    ``str(err)`` is ``"<CODE>: <detail>"`` so clients can match on the code
    even though the transport only carries the message text.
    """

    kind: ErrorKind = ErrorKind.RETRIEVAL_FAILED

    def __init__(self, detail: str):
        super().__init__(f"{self.kind.value}: {detail}")
        self.detail = detail

    @property
    def code(self) -> str:
        return self.kind.value


class UnknownToolError(ToolCallError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool '{tool_name}'")
        self.tool_name = tool_name


class MissingQueryError(ToolCallError):
    kind = ErrorKind.MISSING_QUERY

    def __init__(self):
        super().__init__("query parameter is required")


class RetrievalFailedError(ToolCallError):
    kind = ErrorKind.RETRIEVAL_FAILED

    def __init__(self, tool_name: str, cause: Optional[BaseException] = None):
        reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown"
        super().__init__(f"Retrieval failed for '{tool_name}' ({reason})")
        self.tool_name = tool_name
        self.cause = cause
