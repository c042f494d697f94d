"""Similarity scoring."""

import logging
import math
from typing import Sequence

from .base import BaseScorer
from .document import Document, ScoredChunk

logger = logging.getLogger(__name__)


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Calculate cosine similarity between two vectors."""
    if len(a) != len(b):
        raise ValueError("Vectors must have the same dimension")

    dot_product = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(x * x for x in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    return dot_product / (norm_a * norm_b)


class LinearScanScorer(BaseScorer):
    """Exact scorer comparing the query against every chunk.

    Cost is O(total chunks x dimension) per query, which is fine for
    small corpora only.
    """

    def top_k(
        self,
        query_embedding: list[float],
        documents: Sequence[Document],
        k: int = 6,
    ) -> list[ScoredChunk]:
        if k <= 0:
            return []

        scored = []
        for document in documents:
            for chunk in document.chunks:
                scored.append(ScoredChunk(
                    doc_id=document.id,
                    name=document.name,
                    chunk_id=chunk.id,
                    text=chunk.text,
                    score=cosine_similarity(query_embedding, chunk.embedding),
                ))

        # list.sort is stable: equal scores keep insertion order
        scored.sort(key=lambda result: result.score, reverse=True)

        logger.debug(f"Scored {len(scored)} chunks from {len(documents)} documents")
        return scored[:k]
