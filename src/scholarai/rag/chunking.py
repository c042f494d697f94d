"""Text chunking strategies."""

import logging
import re

from .base import BaseChunker

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 3500
DEFAULT_CHUNK_OVERLAP = 300
DEFAULT_MAX_CHUNKS = 500
DEFAULT_MAX_CHUNK_SIZE = 20000
DEFAULT_GROWTH = 1.5


def normalize_text(text: str) -> str:
    """Normalize line endings and collapse blank-line runs.

    Args:
        text: Raw extracted text

    Returns:
        Normalized text
    """
    text = (text or "").replace("\r\n", "\n")
    text = re.sub(r"\s+\n", "\n", text)
    return re.sub(r"\n{3,}", "\n\n", text)


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """Split text into fixed-size, overlapping windows.

    Overlap is clamped to half the chunk size. Windows are trimmed and
    empty ones are dropped. Iteration stops once a window reaches the end
    of the text.

    Args:
        text: Text to chunk
        chunk_size: Maximum characters per chunk
        overlap: Characters shared between consecutive windows

    Returns:
        Chunk texts in order
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    cleaned = normalize_text(text)
    if not cleaned:
        return []

    safe_overlap = max(0, min(overlap, chunk_size // 2))
    chunks = []
    start = 0

    while start < len(cleaned):
        end = min(start + chunk_size, len(cleaned))
        piece = cleaned[start:end].strip()
        if piece:
            chunks.append(piece)

        if end >= len(cleaned):
            break
        # chunk_size >= 1 and overlap <= chunk_size // 2, so this always advances
        start = end - safe_overlap

    return chunks


class FixedSizeChunker(BaseChunker):
    """Chunk text into fixed-size pieces with overlap."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_CHUNK_OVERLAP,
    ):
        """Initialize the fixed-size chunker.

        Args:
            chunk_size: Maximum characters per chunk
            overlap: Number of characters to overlap between chunks
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[str]:
        return chunk_text(text, self.chunk_size, self.overlap)


class AdaptiveChunker(BaseChunker):
    """Fixed-size chunker that respects a maximum chunk count per document.

    When the default size yields too many chunks, the chunk size grows
    geometrically until the count fits or ``max_chunk_size`` is reached.
    If the text still needs more than ``max_chunks`` chunks, the trailing
    chunks are dropped and a warning is logged.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_CHUNK_OVERLAP,
        max_chunks: int = DEFAULT_MAX_CHUNKS,
        max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
        growth: float = DEFAULT_GROWTH,
    ):
        """Initialize the adaptive chunker.

        Args:
            chunk_size: Starting characters per chunk
            overlap: Number of characters to overlap between chunks
            max_chunks: Hard cap on chunks per document
            max_chunk_size: Chunk size beyond which growth stops
            growth: Multiplier applied to the chunk size on each retry
        """
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if max_chunks <= 0:
            raise ValueError("max_chunks must be positive")
        if growth <= 1:
            raise ValueError("growth must be greater than 1")

        self.chunk_size = chunk_size
        self.overlap = overlap
        self.max_chunks = max_chunks
        self.max_chunk_size = max_chunk_size
        self.growth = growth

    def chunk(self, text: str) -> list[str]:
        size = self.chunk_size
        chunks = chunk_text(text, size, self.overlap)

        while len(chunks) > self.max_chunks and size < self.max_chunk_size:
            size = max(size + 1, int(size * self.growth))
            chunks = chunk_text(text, size, self.overlap)
            logger.debug(f"Re-chunked at size {size}: {len(chunks)} chunks")

        if len(chunks) > self.max_chunks:
            dropped = len(chunks) - self.max_chunks
            logger.warning(
                f"Text needs {len(chunks)} chunks at size {size}; "
                f"keeping the first {self.max_chunks} and dropping {dropped}"
            )
            chunks = chunks[: self.max_chunks]

        return chunks
