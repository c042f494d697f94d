"""Base classes and abstract interfaces for RAG components."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .document import Document, DocumentSummary, ScoredChunk


class BaseEmbedding(ABC):
    """Abstract base class for embedding models.

    Embedding models convert text into dense vector representations.
    """

    @abstractmethod
    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed a list of documents.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors, in input order
        """
        pass

    @abstractmethod
    async def embed_query(self, text: str) -> list[float]:
        """Embed a single query.

        Args:
            text: Query text to embed

        Returns:
            Embedding vector
        """
        pass


class BaseScorer(ABC):
    """Abstract base class for similarity scorers.

    Scorers rank the chunks of a set of documents against a query vector.
    """

    @abstractmethod
    def top_k(
        self,
        query_embedding: list[float],
        documents: Sequence["Document"],
        k: int = 6,
    ) -> list["ScoredChunk"]:
        """Score chunks and return the best ones.

        Args:
            query_embedding: Query embedding vector
            documents: Documents whose chunks are candidates
            k: Number of results to return

        Returns:
            At most k scored chunks, sorted by score descending
        """
        pass


class BaseChunker(ABC):
    """Abstract base class for text chunkers.

    Chunkers split extracted text into pieces for embedding.
    """

    @abstractmethod
    def chunk(self, text: str) -> list[str]:
        """Split text into chunks.

        Args:
            text: Text to chunk

        Returns:
            List of non-empty chunk texts, in document order
        """
        pass


class BaseDocumentStore(ABC):
    """Abstract base class for document stores."""

    @abstractmethod
    async def load(self) -> list["Document"]:
        """Load every stored document."""
        pass

    @abstractmethod
    async def append(self, documents: list["Document"]) -> None:
        """Persist new documents alongside the existing ones.

        Args:
            documents: Documents to add
        """
        pass

    @abstractmethod
    async def list_documents(self) -> list["DocumentSummary"]:
        """Return metadata for every stored document."""
        pass

    @abstractmethod
    async def get(self, document_id: str) -> Optional["Document"]:
        """Get a document by its ID.

        Args:
            document_id: Document ID

        Returns:
            The document if found, None otherwise
        """
        pass
