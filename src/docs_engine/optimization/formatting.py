"""Render optimized results as an LLM-facing text block."""

from collections.abc import Sequence

from docs_engine.core.models.search import (
    OptimizationResponse,
    OptimizedResult,
    ResultKind,
    ScoredHit,
)

RESULT_LABELS = {
    ResultKind.FULL_DOCUMENT: "Full Document",
    ResultKind.EXPANDED_CHUNK: "Expanded Section",
    ResultKind.CHUNK: "Relevant Chunk",
}

BREAKDOWN_LABELS = {
    ResultKind.FULL_DOCUMENT: "Full Documents",
    ResultKind.EXPANDED_CHUNK: "Expanded Sections",
    ResultKind.CHUNK: "Individual Chunks",
}

RESULT_DIVIDER = "\n\n---\n\n"


def format_result_header(result: OptimizedResult) -> str:
    """Two-line header naming the presentation kind and its numbers."""
    return (
        f"{RESULT_LABELS[result.kind]} | {result.document_id}\n"
        f"Relevance: {result.relevance_score:.2f} | Chunks Found: {result.chunks_found}"
        f" | Tokens: {result.token_count}"
    )


def format_search_response(
    query: str,
    hits: Sequence[ScoredHit],
    response: OptimizationResponse,
    token_budget: int,
) -> str:
    """Summary of the optimization followed by every result block."""
    if not hits:
        return f'No results found for "{query}" in the documentation.'
    if not response.results:
        return f'No results found for "{query}" after optimization.'

    stats = response.stats
    documents_found = len({hit.document_id for hit in hits})
    documents_returned = len({result.document_id for result in response.results})
    coverage = documents_returned / documents_found

    summary = "\n".join(
        [
            "Search Results Summary (Document-Centric Optimization):",
            f'- Query: "{query}"',
            f"- Search strategy: {stats.strategy}",
            f"- Original chunks found: {len(hits)} from {documents_found} documents"
            f" ({stats.original_tokens} tokens)",
            f"- Optimized results: {len(response.results)} documents"
            f" ({stats.optimized_tokens} tokens)",
            f"- Token utilization: {round(stats.utilization * 100)}% of {token_budget} tokens",
            f"- Document coverage: {round(coverage * 100)}% of available documents returned",
            "",
            "Documents Retrieved in Full:",
            _format_full_documents(response.results),
            "",
            "Document Processing Breakdown:",
            _format_breakdown(response.results),
            "",
            "Optimization Benefits:",
            _format_insights(response),
        ]
    )

    blocks = [
        f"{format_result_header(result)}\n\n{result.content.strip()}"
        for result in response.results
    ]
    return summary + RESULT_DIVIDER + RESULT_DIVIDER.join(blocks)


def _format_full_documents(results: Sequence[OptimizedResult]) -> str:
    full_documents = [r for r in results if r.kind == ResultKind.FULL_DOCUMENT]
    if not full_documents:
        return "None (all results are chunks or expanded sections)"

    return "\n".join(
        f"{i}. {r.document_id} ({r.chunks_found} chunks found, {r.token_count} tokens)"
        for i, r in enumerate(full_documents, start=1)
    )


def _format_breakdown(results: Sequence[OptimizedResult]) -> str:
    lines: list[str] = []
    for kind in ResultKind:
        of_kind = [r for r in results if r.kind == kind]
        if not of_kind:
            continue
        lines.append(f"{BREAKDOWN_LABELS[kind]}: {len(of_kind)}")
        for i, r in enumerate(of_kind, start=1):
            suffix = " (truncated)" if r.truncated else ""
            lines.append(f"  {i}. {r.document_id} - {r.token_count} tokens{suffix}")
    return "\n".join(lines)


def _format_insights(response: OptimizationResponse) -> str:
    counts = {kind: 0 for kind in ResultKind}
    for result in response.results:
        counts[result.kind] += 1

    insights: list[str] = []
    if counts[ResultKind.FULL_DOCUMENT]:
        insights.append(
            f"- {counts[ResultKind.FULL_DOCUMENT]} document(s) returned in full"
            " (high relevance detected)"
        )
    if counts[ResultKind.EXPANDED_CHUNK]:
        insights.append(f"- {counts[ResultKind.EXPANDED_CHUNK]} section(s) expanded with context")
    if counts[ResultKind.CHUNK]:
        insights.append(f"- {counts[ResultKind.CHUNK]} focused chunk(s) for specific queries")

    stats = response.stats
    if stats.original_tokens:
        ratio = stats.optimized_tokens / stats.original_tokens
        insights.append(f"- Output is {round(ratio * 100)}% of the raw matched tokens")
    return "\n".join(insights)
