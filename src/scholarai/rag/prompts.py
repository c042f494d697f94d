"""Prompt assembly for grounded answers and summaries."""

from .document import Citation, ScoredChunk

ASSISTANT_NAME = "ScholarAI"

SUMMARY_SYSTEM_PROMPT = "Summarize clearly with bullet points and key terms."


def build_context(results: list[ScoredChunk]) -> str:
    """Format scored chunks into labelled source blocks.

    Labels start at 1 and match the citation labels.
    """
    return "\n\n".join(
        f"--- Source {i + 1} | {result.name} | chunk {result.chunk_id} | score {result.score:.3f} ---\n"
        f"{result.text}"
        for i, result in enumerate(results)
    )


def build_system_prompt(source_count: int) -> str:
    """Instruction restricting the model to the supplied sources."""
    labels = ", ".join(str(i + 1) for i in range(source_count))
    return (
        f"You are {ASSISTANT_NAME}, a study assistant. Answer the user using ONLY the provided sources.\n"
        "If the answer isn't in the sources, say you don't have enough information.\n"
        f"Cite like [{labels}] where relevant. Be concise and helpful."
    )


def build_question_prompt(question: str, context: str) -> str:
    return f"QUESTION:\n{question}\n\nSOURCES:\n{context}"


def build_answer_messages(question: str, results: list[ScoredChunk]) -> list[dict[str, str]]:
    """Chat messages asking for a cited answer to question from results."""
    return [
        {"role": "system", "content": build_system_prompt(len(results))},
        {"role": "user", "content": build_question_prompt(question, build_context(results))},
    ]


def build_summary_messages(text: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
        {"role": "user", "content": text},
    ]


def build_citations(results: list[ScoredChunk]) -> list[Citation]:
    """Citations aligned with the source labels of :func:`build_context`."""
    return [
        Citation(
            label=i + 1,
            name=result.name,
            chunk_id=result.chunk_id,
            doc_id=result.doc_id,
            score=result.score,
        )
        for i, result in enumerate(results)
    ]
