# MCP server package: tool definitions, index binding and request routing
from .arg_spec import parse_tool_definitions
from .errors import (
    ConfigMissingError,
    ConfigurationError,
    DuplicateToolNameError,
    ErrorKind,
    MissingQueryError,
    NoDefinitionsError,
    RetrievalFailedError,
    ToolCallError,
    UnknownToolError,
)
from .index_binder import IndexHandle, bind_indexes
from .router import RequestRouter
from .tool_registry import ToolDefinition, ToolRegistry

__all__ = [
    "parse_tool_definitions",
    "ToolDefinition",
    "ToolRegistry",
    "IndexHandle",
    "bind_indexes",
    "RequestRouter",
    "ErrorKind",
    "ConfigurationError",
    "ConfigMissingError",
    "NoDefinitionsError",
    "DuplicateToolNameError",
    "ToolCallError",
    "UnknownToolError",
    "MissingQueryError",
    "RetrievalFailedError",
]
