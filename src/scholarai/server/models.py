"""Request and response models for the HTTP API."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from scholarai.rag.document import Citation, DocumentSummary, UploadedDocument


class AskRequest(BaseModel):
    question: Optional[str] = None
    document_ids: Optional[list[str]] = Field(
        default=None,
        validation_alias=AliasChoices("documentIds", "docIds", "document_ids"),
    )
    k: Optional[int] = None


class SummarizeRequest(BaseModel):
    document_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("documentId", "docId", "document_id"),
    )


class HealthResponse(BaseModel):
    ok: bool = True


class DocumentListResponse(BaseModel):
    documents: list[DocumentSummary]


class UploadResponse(BaseModel):
    uploaded: list[UploadedDocument]


class AskResponse(BaseModel):
    answer: str
    citations: list[Citation]


class SummarizeResponse(BaseModel):
    summary: str


class ErrorResponse(BaseModel):
    error: str
