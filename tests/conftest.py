"""
Test configuration and fixtures.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from scholarai.providers.base import LLMProvider
from scholarai.rag import FakeEmbedding, JSONDocumentStore, RAGPipeline
from scholarai.server.app import create_app
from scholarai.utils.config import AppConfig


class FakeLLMProvider(LLMProvider):
    """Completion provider that records calls and returns a canned reply."""

    def __init__(self, content: str = "Grounded answer [1]."):
        self.content = content
        self.calls: list[dict[str, Any]] = []

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str,
        temperature: float = 0.2,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> dict[str, Any]:
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return {"content": self.content, "usage": {}, "finish_reason": "stop"}


@pytest.fixture
def store(tmp_path):
    """Document store in a temporary directory."""
    return JSONDocumentStore(tmp_path / "data" / "store.json")


@pytest.fixture
def embedding():
    return FakeEmbedding(dimension=64)


@pytest.fixture
def llm():
    return FakeLLMProvider()


@pytest.fixture
def pipeline(store, embedding, llm):
    """Pipeline wired with offline fakes."""
    return RAGPipeline(embedding=embedding, store=store, llm_provider=llm)


@pytest.fixture
def config(tmp_path):
    return AppConfig(data_dir=str(tmp_path / "data"), openai_api_key="test-key")


@pytest.fixture
def client(config, pipeline):
    """HTTP client for an app using the fake pipeline."""
    return TestClient(create_app(config=config, pipeline=pipeline))
