"""RAG pipeline: upload, ask and summarize."""

import asyncio
import logging
from typing import Optional

from scholarai.exceptions import (
    DocumentNotFoundError,
    EmbeddingMismatchError,
    ExtractionError,
    InvalidRequestError,
    MissingCredentialsError,
    NoDocumentsError,
)
from scholarai.providers.base import LLMProvider

from .base import BaseChunker, BaseDocumentStore, BaseEmbedding, BaseScorer
from .chunking import AdaptiveChunker
from .document import Answer, Document, DocumentSummary, UploadedDocument, UploadedFile
from .extraction import extract_text
from .prompts import build_answer_messages, build_citations, build_summary_messages
from .scoring import LinearScanScorer

logger = logging.getLogger(__name__)


class RAGPipeline:
    """Retrieval-augmented question answering over uploaded documents.

    Combines text extraction, chunking, embedding, the document store,
    similarity scoring and a chat-completion provider.

    Example:
        ```python
        pipeline = RAGPipeline(
            embedding=OpenAIEmbedding(),
            store=JSONDocumentStore("data/store.json"),
            llm_provider=OpenAIProvider(),
        )

        uploaded = await pipeline.upload([UploadedFile(filename="notes.txt", data=b"...")])
        answer = await pipeline.ask("What is covered in chapter 2?")
        ```
    """

    def __init__(
        self,
        embedding: BaseEmbedding,
        store: BaseDocumentStore,
        llm_provider: LLMProvider,
        chunker: Optional[BaseChunker] = None,
        scorer: Optional[BaseScorer] = None,
        chat_model: str = "gpt-4o-mini",
        answer_temperature: float = 0.2,
        summary_temperature: float = 0.3,
        summary_max_chars: int = 100_000,
        max_tokens: Optional[int] = None,
        credentials_configured: bool = True,
    ):
        """Initialize the RAG pipeline.

        Args:
            embedding: Embedding model for chunks and questions
            store: Document store
            llm_provider: Chat-completion provider for answers and summaries
            chunker: Text chunker (default: AdaptiveChunker)
            scorer: Similarity scorer (default: LinearScanScorer)
            chat_model: Completion model name
            answer_temperature: Sampling temperature for answers
            summary_temperature: Sampling temperature for summaries
            summary_max_chars: Characters of document text sent for a summary
            max_tokens: Completion token limit (provider default if None)
            credentials_configured: False when no API key is available; uploads are refused
        """
        self.embedding = embedding
        self.store = store
        self.llm_provider = llm_provider
        self.chunker = chunker or AdaptiveChunker()
        self.scorer = scorer or LinearScanScorer()
        self.chat_model = chat_model
        self.answer_temperature = answer_temperature
        self.summary_temperature = summary_temperature
        self.summary_max_chars = summary_max_chars
        self.max_tokens = max_tokens
        self.credentials_configured = credentials_configured

    async def _extract(self, file: UploadedFile) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: extract_text(file))

    async def _build_document(self, file: UploadedFile) -> Optional[Document]:
        """Extract, chunk and embed one file.

        Returns None when the file is skipped. Embedding API errors propagate.
        """
        try:
            text = (await self._extract(file)).strip()
        except ExtractionError as e:
            logger.error(f"extract_text failed: {e.message}")
            return None

        if not text:
            logger.warning(f"No text extracted from {file.filename}; skipping")
            return None

        chunks = self.chunker.chunk(text)
        if not chunks:
            return None

        try:
            embeddings = await self.embedding.embed_documents(chunks)
        except EmbeddingMismatchError as e:
            logger.error(f"{e.message} in {file.filename}; skipping")
            return None

        if len(embeddings) != len(chunks):
            logger.error(
                f"Embedding mismatch: got {len(embeddings)} for {len(chunks)} chunks in {file.filename}; skipping"
            )
            return None

        return Document.create(name=file.filename, texts=chunks, embeddings=embeddings)

    async def upload(self, files: list[UploadedFile]) -> list[UploadedDocument]:
        """Ingest uploaded files into the store.

        Files that cannot be extracted or embedded are logged and skipped.
        Every file is embedded before anything is written.

        Args:
            files: Uploaded files

        Returns:
            One entry per stored document

        Raises:
            MissingCredentialsError: If no API key is configured
            InvalidRequestError: If no files were given or none could be ingested
        """
        if not self.credentials_configured:
            raise MissingCredentialsError()
        if not files:
            raise InvalidRequestError("No files uploaded")

        documents = []
        for file in files:
            document = await self._build_document(file)
            if document is not None:
                documents.append(document)

        if not documents:
            raise InvalidRequestError("None of the uploaded files could be processed")

        await self.store.append(documents)

        logger.info(f"Uploaded {len(documents)} of {len(files)} files")
        return [
            UploadedDocument(id=doc.id, name=doc.name, chunk_count=doc.chunk_count)
            for doc in documents
        ]

    async def list_documents(self) -> list[DocumentSummary]:
        return await self.store.list_documents()

    async def ask(
        self,
        question: str,
        document_ids: Optional[list[str]] = None,
        k: int = 6,
    ) -> Answer:
        """Answer a question from the most similar chunks.

        Args:
            question: The user's question
            document_ids: Restrict the search to these documents (all if empty)
            k: Number of chunks to use as sources

        Returns:
            Generated answer with citations aligned to the source labels

        Raises:
            InvalidRequestError: If the question is blank or k is not positive
            NoDocumentsError: If no document is in scope
        """
        if not isinstance(question, str) or not question.strip():
            raise InvalidRequestError("Missing question")
        if k < 1:
            raise InvalidRequestError("k must be a positive integer")

        documents = await self.store.load()
        if document_ids:
            wanted = set(document_ids)
            documents = [doc for doc in documents if doc.id in wanted]

        if not documents:
            raise NoDocumentsError()

        query_embedding = await self.embedding.embed_query(question)
        results = self.scorer.top_k(query_embedding, documents, k)

        response = await self.llm_provider.complete(
            build_answer_messages(question, results),
            model=self.chat_model,
            temperature=self.answer_temperature,
            max_tokens=self.max_tokens,
        )

        return Answer(
            answer=response.get("content") or "",
            citations=build_citations(results),
        )

    async def summarize(self, document_id: str) -> str:
        """Summarize one stored document.

        Args:
            document_id: ID of the document

        Returns:
            Generated summary

        Raises:
            InvalidRequestError: If document_id is empty
            DocumentNotFoundError: If the document does not exist
        """
        if not document_id:
            raise InvalidRequestError("Missing documentId")

        document = await self.store.get(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        text = "\n\n".join(chunk.text for chunk in document.chunks)[: self.summary_max_chars]

        response = await self.llm_provider.complete(
            build_summary_messages(text),
            model=self.chat_model,
            temperature=self.summary_temperature,
            max_tokens=self.max_tokens,
        )

        return response.get("content") or ""
