"""FastAPI application for the ScholarAI API."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import APIRouter, Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scholarai import __version__
from scholarai.exceptions import InvalidRequestError, ScholarAIError, UploadTooLargeError
from scholarai.providers.openai import OpenAIProvider
from scholarai.rag.chunking import AdaptiveChunker
from scholarai.rag.document import UploadedFile
from scholarai.rag.embeddings import OpenAIEmbedding
from scholarai.rag.pipeline import RAGPipeline
from scholarai.rag.store import JSONDocumentStore
from scholarai.server.models import (
    AskRequest,
    AskResponse,
    DocumentListResponse,
    ErrorResponse,
    HealthResponse,
    SummarizeRequest,
    SummarizeResponse,
    UploadResponse,
)
from scholarai.utils.config import AppConfig, load_config
from scholarai.utils.logging import get_logger, set_log_level, uvicorn_log_config

logger = logging.getLogger(__name__)


def build_pipeline(config: AppConfig) -> RAGPipeline:
    """Wire the OpenAI-backed pipeline described by config."""
    embedding = OpenAIEmbedding(
        model=config.embedding_model,
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
        batch_size=config.embedding_batch_size,
        timeout=config.openai_timeout,
        max_retries=config.openai_max_retries,
    )
    provider = OpenAIProvider(
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
        timeout=config.openai_timeout,
        max_retries=config.openai_max_retries,
    )
    chunker = AdaptiveChunker(
        chunk_size=config.chunk_size,
        overlap=config.chunk_overlap,
        max_chunks=config.max_chunks_per_doc,
        max_chunk_size=config.max_chunk_size,
    )

    return RAGPipeline(
        embedding=embedding,
        store=JSONDocumentStore(config.store_path),
        llm_provider=provider,
        chunker=chunker,
        chat_model=config.chat_model,
        answer_temperature=config.answer_temperature,
        summary_temperature=config.summary_temperature,
        summary_max_chars=config.summary_max_chars,
        max_tokens=config.max_tokens,
        credentials_configured=bool(config.openai_api_key),
    )


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Log exceptions nobody awaited instead of letting them go unnoticed."""
    exc = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exc is not None:
        logger.error(f"{message}: {exc!r}", exc_info=exc)
    else:
        logger.error(message)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown."""
    asyncio.get_running_loop().set_exception_handler(_log_loop_exception)

    store = app.state.pipeline.store
    if isinstance(store, JSONDocumentStore):
        await store.initialize()

    logger.info("ScholarAI API ready.")
    yield
    logger.info("ScholarAI API shut down.")


def get_pipeline(request: Request) -> RAGPipeline:
    return request.app.state.pipeline


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def _internal_error(route: str, exc: Exception) -> HTTPException:
    logger.exception(f"{route} route error")
    return HTTPException(status_code=500, detail=str(exc) or exc.__class__.__name__)



def _error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    return {code: {"model": ErrorResponse} for code in (*status_codes, 500)}


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(ok=True)


@router.get("/documents", response_model=DocumentListResponse, responses=_error_responses())
async def list_documents(pipeline: RAGPipeline = Depends(get_pipeline)) -> DocumentListResponse:
    """List stored documents without their chunks."""
    try:
        documents = await pipeline.list_documents()
    except ScholarAIError:
        raise
    except Exception as exc:
        raise _internal_error("documents", exc) from exc
    return DocumentListResponse(documents=documents)


@router.post("/upload", response_model=UploadResponse, responses=_error_responses(400, 413))
async def upload(
    files: Optional[list[UploadFile]] = File(None),
    pipeline: RAGPipeline = Depends(get_pipeline),
    config: AppConfig = Depends(get_config),
) -> UploadResponse:
    """
    Upload documents via multipart form (field ``files``).

    Raises:
        HTTPException(400): Too many files, no files, missing API key, or nothing ingested
        HTTPException(413): A file exceeds the size limit
        HTTPException(500): Embedding API failure
    """
    files = files or []
    if len(files) > config.max_upload_files:
        raise InvalidRequestError(f"Too many files. Maximum: {config.max_upload_files}")

    uploaded_files = []
    for file in files:
        # One byte past the limit is enough to reject the file
        data = await file.read(config.max_upload_bytes + 1)
        if len(data) > config.max_upload_bytes:
            logger.warning(f"Upload rejected: {file.filename} exceeds {config.max_upload_bytes} bytes")
            raise UploadTooLargeError(file.filename or "upload", config.max_upload_bytes)
        uploaded_files.append(UploadedFile(
            filename=file.filename or "upload",
            content_type=file.content_type,
            data=data,
        ))

    try:
        uploaded = await pipeline.upload(uploaded_files)
    except ScholarAIError:
        raise
    except Exception as exc:
        raise _internal_error("upload", exc) from exc
    return UploadResponse(uploaded=uploaded)


@router.post("/ask", response_model=AskResponse, responses=_error_responses(400))
async def ask(
    request: AskRequest,
    pipeline: RAGPipeline = Depends(get_pipeline),
    config: AppConfig = Depends(get_config),
) -> AskResponse:
    """Answer a question grounded in the stored documents."""
    k = request.k if request.k is not None else config.default_k
    try:
        answer = await pipeline.ask(request.question, request.document_ids, k)
    except ScholarAIError:
        raise
    except Exception as exc:
        raise _internal_error("ask", exc) from exc
    return AskResponse(answer=answer.answer, citations=answer.citations)


@router.post("/summarize", response_model=SummarizeResponse, responses=_error_responses(400, 404))
async def summarize(
    request: SummarizeRequest,
    pipeline: RAGPipeline = Depends(get_pipeline),
) -> SummarizeResponse:
    """Summarize one document."""
    try:
        summary = await pipeline.summarize(request.document_id)
    except ScholarAIError:
        raise
    except Exception as exc:
        raise _internal_error("summarize", exc) from exc
    return SummarizeResponse(summary=summary)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ScholarAIError)
    async def scholarai_error_handler(request: Request, exc: ScholarAIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def global_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("global error handler")
        return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(
    config: Optional[AppConfig] = None,
    pipeline: Optional[RAGPipeline] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Server configuration (loaded from file/environment if None)
        pipeline: Pre-built pipeline (built from config if None)

    Returns:
        FastAPI: Configured application instance
    """
    config = config or load_config()

    app = FastAPI(
        title="ScholarAI",
        description="Upload documents, ask grounded questions and get summaries.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.pipeline = pipeline or build_pipeline(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    # Legacy /api paths, including /api/docs for listing
    app.include_router(router, prefix="/api")
    app.add_api_route(
        "/api/docs",
        list_documents,
        methods=["GET"],
        response_model=DocumentListResponse,
        responses=_error_responses(),
    )

    _register_error_handlers(app)
    return app


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    config = load_config()
    get_logger()
    set_log_level(config.log_level)

    logger.info(f"ScholarAI server listening on http://{config.host}:{config.port}")
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_config=uvicorn_log_config(config.log_level),
    )


if __name__ == "__main__":
    main()
