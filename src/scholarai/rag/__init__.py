"""RAG (Retrieval-Augmented Generation) system for ScholarAI.

This module provides:
- Document and chunk data structures
- Text extraction for PDF, DOCX and plain text
- Adaptive fixed-size chunking
- OpenAI and fake embedding providers
- Linear-scan cosine similarity scoring
- A JSON file document store
- The upload / ask / summarize pipeline
"""

# Data structures
from .document import (
    Answer,
    Chunk,
    Citation,
    Document,
    DocumentSummary,
    ScoredChunk,
    UploadedDocument,
    UploadedFile,
)

# Base classes
from .base import (
    BaseChunker,
    BaseDocumentStore,
    BaseEmbedding,
    BaseScorer,
)

# Components
from .chunking import AdaptiveChunker, FixedSizeChunker, chunk_text, normalize_text
from .embeddings import FakeEmbedding, OpenAIEmbedding
from .extraction import extract_text
from .scoring import LinearScanScorer, cosine_similarity
from .store import JSONDocumentStore

# Pipeline
from .pipeline import RAGPipeline

__all__ = [
    # Data structures
    "Answer",
    "Chunk",
    "Citation",
    "Document",
    "DocumentSummary",
    "ScoredChunk",
    "UploadedDocument",
    "UploadedFile",
    # Base classes
    "BaseChunker",
    "BaseDocumentStore",
    "BaseEmbedding",
    "BaseScorer",
    # Chunking
    "AdaptiveChunker",
    "FixedSizeChunker",
    "chunk_text",
    "normalize_text",
    # Embeddings
    "FakeEmbedding",
    "OpenAIEmbedding",
    # Extraction
    "extract_text",
    # Scoring
    "LinearScanScorer",
    "cosine_similarity",
    # Store
    "JSONDocumentStore",
    # Pipeline
    "RAGPipeline",
]
