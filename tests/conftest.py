# Shared fixtures for the LlamaCloud MCP server tests
# The retrieval engine is always faked; nothing here touches the network.

from typing import Iterable, List, Optional
from unittest.mock import Mock

import pytest
from llama_index.core.schema import NodeWithScore, TextNode
from pydantic import SecretStr

from llamacloud_mcp.mcp_server.index_binder import IndexHandle
from llamacloud_mcp.mcp_server.router import RequestRouter
from llamacloud_mcp.shared import config as config_module

LLAMA_CLOUD_ENV_VARS = (
    "LLAMA_CLOUD_API_KEY",
    "LLAMA_CLOUD_PROJECT_NAME",
    "LLAMA_CLOUD_BASE_URL",
    "LLAMA_CLOUD_ORGANIZATION_ID",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


class FakeRetriever:
    """Stands in for a LlamaCloud retriever; records every query it sees."""

    def __init__(
        self, texts: Iterable[str] = (), error: Optional[Exception] = None
    ):
        self.texts = list(texts)
        self.error = error
        self.queries: List[str] = []

    async def aretrieve(self, query: str) -> List[NodeWithScore]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return [
            NodeWithScore(node=TextNode(text=text), score=1.0 - i * 0.1)
            for i, text in enumerate(self.texts)
        ]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Clear LlamaCloud env vars, run from an empty dir (no .env), reset cached settings."""
    for name in LLAMA_CLOUD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "_settings", None)
    yield
    config_module._settings = None


@pytest.fixture
def docs_handle() -> IndexHandle:
    return IndexHandle(
        tool_name="get_information_docs",
        index_name="Docs",
        description="Company handbook",
        project_name="Default",
        api_key=SecretStr("llx-test"),
        similarity_top_k=3,
    )


@pytest.fixture
def fake_retriever() -> FakeRetriever:
    return FakeRetriever(texts=["Chunk A", "Chunk B"])


@pytest.fixture
def retriever_factory(fake_retriever) -> Mock:
    return Mock(return_value=fake_retriever)


@pytest.fixture
def router(docs_handle, retriever_factory) -> RequestRouter:
    return RequestRouter(
        {docs_handle.tool_name: docs_handle}, retriever_factory=retriever_factory
    )


@pytest.fixture
def make_router(docs_handle):
    """Build a router over ``docs_handle`` whose engine returns ``texts`` or raises ``error``."""

    def _make(texts: Iterable[str] = (), error: Optional[Exception] = None):
        retriever = FakeRetriever(texts=texts, error=error)
        router = RequestRouter(
            {docs_handle.tool_name: docs_handle},
            retriever_factory=Mock(return_value=retriever),
        )
        return router, retriever

    return _make
