"""
Request router for get_information_* tool calls.

Resolves the bound index by tool name, validates the query, runs retrieval
and joins the retrieved node texts in engine order.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from llama_index.core.schema import MetadataMode, NodeWithScore

from llamacloud_mcp.mcp_server.errors import (
    MissingQueryError,
    RetrievalFailedError,
    UnknownToolError,
)
from llamacloud_mcp.mcp_server.index_binder import IndexHandle
from llamacloud_mcp.shared.observability import get_logger

logger = get_logger(__name__)

CHUNK_SEPARATOR = "\n\n"

RetrieverFactory = Callable[[IndexHandle], Any]


def _default_retriever_factory(handle: IndexHandle) -> Any:
    return handle.build_retriever()


def extract_query(arguments: Optional[Mapping[str, Any]]) -> str:
    """Coerce ``arguments["query"]`` to a string or raise MissingQueryError if blank."""
    raw = (arguments or {}).get("query")
    if raw is None:
        raise MissingQueryError()
    query = str(raw)
    if not query.strip():
        raise MissingQueryError()
    return query


def join_nodes(nodes: Sequence[NodeWithScore]) -> str:
    # Body text only; the engine merges file and pipeline metadata into every node
    return CHUNK_SEPARATOR.join(
        item.node.get_content(metadata_mode=MetadataMode.NONE) for item in nodes
    )


class RequestRouter:
    """
    Dispatches tool calls to their bound index.

    The tool-name-to-handle mapping is immutable. Each handle's retriever is
    built on first use and reused for every later call; a per-handle lock
    keeps concurrent first calls from building it twice.
    """

    def __init__(
        self,
        handles: Mapping[str, IndexHandle],
        retriever_factory: Optional[RetrieverFactory] = None,
    ):
        self._handles = dict(handles)
        self._retriever_factory = retriever_factory or _default_retriever_factory
        self._retrievers: Dict[str, Any] = {}
        self._locks = {tool_name: asyncio.Lock() for tool_name in self._handles}

    async def _get_retriever(self, handle: IndexHandle) -> Any:
        retriever = self._retrievers.get(handle.tool_name)
        if retriever is not None:
            return retriever
        async with self._locks[handle.tool_name]:
            retriever = self._retrievers.get(handle.tool_name)
            if retriever is None:
                # Construction is synchronous and resolves the pipeline remotely
                retriever = await asyncio.to_thread(self._retriever_factory, handle)
                self._retrievers[handle.tool_name] = retriever
                logger.info(
                    "retriever_created",
                    tool_name=handle.tool_name,
                    index_name=handle.index_name,
                )
        return retriever

    async def handle(
        self, tool_name: str, arguments: Optional[Mapping[str, Any]]
    ) -> Dict[str, str]:
        """
        Run one tool call.

        Returns:
            ``{"content": <joined text>}``; no matches yields an empty string

        Raises:
            UnknownToolError: If no index is bound to ``tool_name``
            MissingQueryError: If the query argument is absent or empty
            RetrievalFailedError: If the retrieval engine fails
        """
        handle = self._handles.get(tool_name)
        if handle is None:
            raise UnknownToolError(tool_name)

        query = extract_query(arguments)

        started = time.perf_counter()
        try:
            retriever = await self._get_retriever(handle)
            nodes = await retriever.aretrieve(query)
            content = join_nodes(nodes)
        except Exception as exc:
            logger.error(
                "retrieval_failed",
                tool_name=tool_name,
                index_name=handle.index_name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise RetrievalFailedError(tool_name, exc) from exc

        logger.info(
            "retrieval_completed",
            tool_name=tool_name,
            index_name=handle.index_name,
            node_count=len(nodes),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return {"content": content}
