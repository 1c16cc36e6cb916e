"""
Index binder: one LlamaCloud index handle per tool definition.

Binding happens eagerly at startup and never touches the network. The
LlamaCloud retriever resolves the project and pipeline when it is
constructed, so that step is deferred to ``IndexHandle.build_retriever``
and the router keeps the result for the life of the process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from llama_index.indices.managed.llama_cloud import LlamaCloudRetriever
from pydantic import SecretStr

from llamacloud_mcp.mcp_server.errors import ConfigMissingError
from llamacloud_mcp.mcp_server.tool_registry import ToolDefinition
from llamacloud_mcp.shared.config import API_KEY_ENV_VAR, Settings
from llamacloud_mcp.shared.observability import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IndexHandle:
    """Everything needed to query one remote index."""

    tool_name: str
    index_name: str
    description: str
    project_name: str
    api_key: SecretStr = field(repr=False)
    similarity_top_k: Optional[int] = None
    base_url: Optional[str] = None
    organization_id: Optional[str] = None

    def build_retriever(self) -> LlamaCloudRetriever:
        """Construct the engine client, honoring the top-k override when set."""
        kwargs: Dict[str, Any] = {}
        if self.similarity_top_k is not None:
            kwargs["dense_similarity_top_k"] = self.similarity_top_k
        if self.base_url:
            kwargs["base_url"] = self.base_url
        if self.organization_id:
            kwargs["organization_id"] = self.organization_id
        return LlamaCloudRetriever(
            name=self.index_name,
            project_name=self.project_name,
            api_key=self.api_key.get_secret_value(),
            **kwargs,
        )


def bind_indexes(
    settings: Settings, definitions: Sequence[ToolDefinition]
) -> Dict[str, IndexHandle]:
    """
    Create one IndexHandle per definition, keyed by tool name.

    Args:
        settings: Shared project/credential settings
        definitions: Validated tool definitions (unique tool names)

    Returns:
        Ordered mapping of tool name to handle

    Raises:
        ConfigMissingError: If the LlamaCloud API key is not set
    """
    if not settings.has_api_key:
        raise ConfigMissingError(API_KEY_ENV_VAR)

    handles: Dict[str, IndexHandle] = {}
    for definition in definitions:
        handle = IndexHandle(
            tool_name=definition.tool_name,
            index_name=definition.index_name,
            description=definition.description,
            project_name=settings.project_name,
            api_key=settings.api_key,
            similarity_top_k=definition.similarity_top_k,
            base_url=settings.base_url,
            organization_id=settings.organization_id,
        )
        handles[handle.tool_name] = handle
        logger.info(
            "tool_bound",
            tool_name=handle.tool_name,
            index_name=handle.index_name,
            description=handle.description,
            project_name=handle.project_name,
            similarity_top_k=handle.similarity_top_k,
        )
    return handles
