"""Embedding model implementations."""

import hashlib
import logging
import math
import re
from typing import Optional

from openai import AsyncOpenAI

from scholarai.exceptions import EmbeddingMismatchError

from .base import BaseEmbedding

logger = logging.getLogger(__name__)


class OpenAIEmbedding(BaseEmbedding):
    """OpenAI embedding model.

    Uses OpenAI's embedding API (text-embedding-3-small/large). Batches are
    sent one after another; API errors propagate to the caller.
    """

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        batch_size: int = 64,
        timeout: Optional[float] = None,
        max_retries: int = 0,
        client: Optional[AsyncOpenAI] = None,
    ):
        """Initialize the OpenAI embedding model.

        Args:
            model: Model name (text-embedding-3-small, text-embedding-3-large)
            api_key: OpenAI API key (optional, uses env var if not provided)
            base_url: Optional base URL for API
            batch_size: Number of texts sent per request
            timeout: Request timeout in seconds (SDK default if None)
            max_retries: Retries performed by the SDK
            client: Pre-built client (mainly for tests)
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self.model = model
        self.api_key = api_key
        self.base_url = base_url
        self.batch_size = batch_size
        self.timeout = timeout
        self.max_retries = max_retries
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            kwargs = {"max_retries": self.max_retries}
            if self.api_key:
                kwargs["api_key"] = self.api_key
            if self.base_url:
                kwargs["base_url"] = self.base_url
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout

            self._client = AsyncOpenAI(**kwargs)
        return self._client

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed a list of documents using OpenAI API.

        Raises:
            EmbeddingMismatchError: If a batch returns a different number of vectors
        """
        if not texts:
            return []

        client = self._get_client()
        all_embeddings = []

        # Process in batches
        for i in range(0, len(texts), self.batch_size):
            batch = texts[i : i + self.batch_size]

            response = await client.embeddings.create(
                model=self.model,
                input=batch,
            )

            if len(response.data) != len(batch):
                raise EmbeddingMismatchError(expected=len(batch), received=len(response.data))

            # The API reports each vector's input position; keep input order
            items = sorted(response.data, key=lambda item: item.index)
            all_embeddings.extend(item.embedding for item in items)

        logger.debug(f"Embedded {len(texts)} texts in {math.ceil(len(texts) / self.batch_size)} batches")
        return all_embeddings

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query using OpenAI API."""
        client = self._get_client()

        response = await client.embeddings.create(
            model=self.model,
            input=text,
        )

        return response.data[0].embedding


class FakeEmbedding(BaseEmbedding):
    """Fake embedding that generates deterministic embeddings from text.

    Words are hashed into buckets and the counts are normalized, so texts
    sharing words get a positive similarity. Useful for running offline
    and in tests.
    """

    def __init__(self, dimension: int = 64, seed: int = 42):
        """Initialize the fake embedding.

        Args:
            dimension: Dimension of the embedding vectors
            seed: Seed mixed into the hash
        """
        self._dimension = dimension
        self.seed = seed
        self.calls = 0

    @property
    def dimension(self) -> int:
        return self._dimension

    def _bucket(self, token: str) -> int:
        digest = hashlib.sha256(f"{self.seed}:{token}".encode()).digest()
        return int.from_bytes(digest[:4], "big") % self._dimension

    def _hash_text(self, text: str) -> list[float]:
        """Generate a deterministic, unit-length embedding from the words of text."""
        tokens = re.findall(r"\w+", text.lower()) or [text]
        vector = [0.0] * self._dimension
        for token in tokens:
            vector[self._bucket(token)] += 1.0

        norm = math.sqrt(sum(v * v for v in vector))
        return [v / norm for v in vector]

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls += 1
        return [self._hash_text(text) for text in texts]

    async def embed_query(self, text: str) -> list[float]:
        self.calls += 1
        return self._hash_text(text)
