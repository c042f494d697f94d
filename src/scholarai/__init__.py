"""
ScholarAI - upload documents, ask questions grounded in them, get summaries.
"""

__version__ = "0.1.0"

from scholarai.rag import (
    Answer,
    Document,
    DocumentSummary,
    JSONDocumentStore,
    RAGPipeline,
    UploadedFile,
)

__all__ = [
    "Answer",
    "Document",
    "DocumentSummary",
    "JSONDocumentStore",
    "RAGPipeline",
    "UploadedFile",
]
