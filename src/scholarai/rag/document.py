"""Document and Chunk data structures for RAG."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Chunk(BaseModel):
    """A chunk of a document.

    Attributes:
        id: Index of the chunk within its document (contiguous from 0)
        text: The trimmed text span
        embedding: Embedding vector of the text
    """

    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    embedding: list[float] = Field(default_factory=list)

    def __repr__(self) -> str:
        content_preview = self.text[:30] + "..." if len(self.text) > 30 else self.text
        return f"Chunk(id={self.id!r}, text={content_preview!r})"


class DocumentSummary(BaseModel):
    """Document metadata without chunk text or embeddings."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    chunk_count: int = Field(alias="chunkCount")
    created_at: str = Field(alias="createdAt")


class Document(BaseModel):
    """An uploaded document with its embedded chunks.

    Documents are immutable once created. ``chunk_count`` is derived from
    ``chunks`` and is written out for readers of the store file only.

    Attributes:
        id: Unique identifier for the document
        name: Original filename
        created_at: ISO-8601 creation timestamp
        chunks: Ordered chunks
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    created_at: str = Field(alias="createdAt")
    chunks: list[Chunk] = Field(default_factory=list)

    @computed_field(alias="chunkCount")
    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    @model_validator(mode="after")
    def _check_chunk_indices(self) -> "Document":
        for position, chunk in enumerate(self.chunks):
            if chunk.id != position:
                raise ValueError(
                    f"Chunk indices of document {self.id!r} are not contiguous: "
                    f"expected {position}, found {chunk.id}"
                )
        return self

    @classmethod
    def create(
        cls,
        name: str,
        texts: list[str],
        embeddings: list[list[float]],
        id: Optional[str] = None,
    ) -> "Document":
        """Build a new document from chunk texts and their embeddings.

        Args:
            name: Document name
            texts: Chunk texts in order
            embeddings: One embedding per text, same order
            id: Explicit id (a new uuid4 is generated if omitted)

        Returns:
            The new document
        """
        if len(texts) != len(embeddings):
            raise ValueError("Number of texts must match number of embeddings")

        return cls(
            id=id or str(uuid.uuid4()),
            name=name,
            created_at=utc_timestamp(),
            chunks=[
                Chunk(id=index, text=text, embedding=embedding)
                for index, (text, embedding) in enumerate(zip(texts, embeddings))
            ],
        )

    def summary(self) -> DocumentSummary:
        """Return the document's metadata without its chunks."""
        return DocumentSummary(
            id=self.id,
            name=self.name,
            chunk_count=self.chunk_count,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"Document(id={self.id!r}, name={self.name!r}, chunks={self.chunk_count})"


class ScoredChunk(BaseModel):
    """A chunk scored against a query.

    Attributes:
        doc_id: ID of the parent document
        name: Name of the parent document
        chunk_id: Index of the chunk in its document
        text: Chunk text
        score: Cosine similarity (higher is better)
    """

    doc_id: str
    name: str
    chunk_id: int
    text: str
    score: float

    def __repr__(self) -> str:
        return f"ScoredChunk(doc_id={self.doc_id!r}, chunk_id={self.chunk_id}, score={self.score:.4f})"


class Citation(BaseModel):
    """A numbered source reference returned with an answer."""

    model_config = ConfigDict(populate_by_name=True)

    label: int
    name: str
    chunk_id: int = Field(alias="chunkId")
    doc_id: str = Field(alias="docId")
    score: float


class Answer(BaseModel):
    """A grounded answer and the sources it may cite."""

    answer: str
    citations: list[Citation] = Field(default_factory=list)


class UploadedFile(BaseModel):
    """A raw file received for ingestion."""

    filename: str
    content_type: Optional[str] = None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"UploadedFile(filename={self.filename!r}, content_type={self.content_type!r}, size={self.size})"


class UploadedDocument(BaseModel):
    """Result entry for one successfully ingested file."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    chunk_count: int = Field(alias="chunkCount")
