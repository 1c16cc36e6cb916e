"""Expose LlamaCloud managed indexes as MCP tools."""

__version__ = "0.1.0"
