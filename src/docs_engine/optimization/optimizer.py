"""Document-centric search result optimizer.

Groups retrieval hits by document, ranks the groups, and packs
full documents, expanded sections or single chunks into a token budget.

Packing is greedy and single-pass: groups are visited in rank order, the
first group that does not fit is truncated when more than
``TRUNCATION_FLOOR_TOKENS`` remain, and packing stops there.
"""

import math
from collections.abc import Sequence

from docs_engine.config.logging import get_logger
from docs_engine.core.interfaces.tokenizer import Tokenizer
from docs_engine.core.models.search import (
    DocumentGroup,
    OptimizationResponse,
    OptimizationStats,
    OptimizedResult,
    ResultKind,
    ScoredHit,
)
from docs_engine.optimization.config import OptimizationOptions, build_optimization_options
from docs_engine.utils.tokenization import count_tokens, get_tokenizer, truncate_to_tokens

logger = get_logger(__name__)

TRUNCATION_FLOOR_TOKENS = 500
TRUNCATION_MARKER_TOKENS = 20
TRUNCATION_NOTICE = "\n\n[Content truncated due to length...]"
CHUNK_SEPARATOR = "\n\n--- \n\n"

# Bonus for documents with many high-quality chunks
_BONUS_MIN_CHUNKS = 3
_BONUS_MIN_AVG_SCORE = 0.8
_BONUS_MULTIPLIER = 1.5

_FULL_DOCUMENT_MIN_AVG_SCORE = 0.75
_EXPANDED_SINGLE_MIN_SCORE = 0.85
_EXPANDED_TOP_HITS = 3


def group_hits(hits: Sequence[ScoredHit], tokenizer: Tokenizer) -> list[DocumentGroup]:
    """Partition hits by document id, keeping first-encounter order."""
    groups: dict[str, DocumentGroup] = {}

    for hit in hits:
        group = groups.get(hit.document_id)
        if group is None:
            group = DocumentGroup(document_id=hit.document_id)
            groups[hit.document_id] = group
        group.chunks.append(hit)
        group.total_tokens += _hit_tokens(hit, tokenizer)

    return list(groups.values())


def score_groups(groups: list[DocumentGroup]) -> list[DocumentGroup]:
    """Set ``avg_score`` and ``relevance_score`` on each group."""
    for group in groups:
        count = len(group.chunks)
        group.avg_score = sum(hit.score for hit in group.chunks) / count
        group.relevance_score = count * group.avg_score

        if count >= _BONUS_MIN_CHUNKS and group.avg_score > _BONUS_MIN_AVG_SCORE:
            group.relevance_score *= _BONUS_MULTIPLIER

    return groups


def select_kind(group: DocumentGroup, options: OptimizationOptions) -> ResultKind:
    """Choose how a group is presented."""
    count = len(group.chunks)

    if count >= options.full_document_threshold and group.avg_score > _FULL_DOCUMENT_MIN_AVG_SCORE:
        return ResultKind.FULL_DOCUMENT
    if count >= 2 or (count == 1 and group.avg_score > _EXPANDED_SINGLE_MIN_SCORE):
        return ResultKind.EXPANDED_CHUNK
    return ResultKind.CHUNK


def combine_hits(hits: Sequence[ScoredHit]) -> str:
    """Join hit contents in document order, separated by a rule line."""
    ordered = sorted(hits, key=lambda hit: hit.metadata.chunk_index or 0)
    return CHUNK_SEPARATOR.join(hit.content.strip() for hit in ordered)


def _hit_tokens(hit: ScoredHit, tokenizer: Tokenizer) -> int:
    if hit.metadata.token_count:
        return hit.metadata.token_count
    return count_tokens(hit.content, tokenizer)


def _best_hit(hits: Sequence[ScoredHit]) -> ScoredHit:
    # max() keeps the first of equally scored hits
    return max(hits, key=lambda hit: hit.score)


class ResultOptimizer:
    """Turns scored retrieval hits into budget-respecting result blocks.

    Holds no state between calls; every derived structure lives only for
    the duration of :meth:`optimize`.
    """

    def __init__(
        self,
        options: OptimizationOptions | None = None,
        tokenizer: Tokenizer | None = None,
    ) -> None:
        self._options = options or build_optimization_options()
        self._tokenizer = tokenizer or get_tokenizer()

    @property
    def options(self) -> OptimizationOptions:
        return self._options

    def optimize(self, hits: Sequence[ScoredHit]) -> OptimizationResponse:
        """Group, score, rank and pack *hits*.

        An empty hit list yields no results and zeroed stats.
        """
        if not hits:
            return OptimizationResponse()

        groups = score_groups(group_hits(hits, self._tokenizer))
        # sorted() is stable, so equal scores keep encounter order
        ranked = sorted(groups, key=lambda group: group.relevance_score, reverse=True)

        results = self._pack(ranked)
        stats = self._build_stats(hits, results)

        logger.info(
            "optimizer.complete",
            hits=len(hits),
            groups=len(groups),
            documents_returned=stats.documents_returned,
            optimized_tokens=stats.optimized_tokens,
            utilization=round(stats.utilization, 4),
        )
        return OptimizationResponse(results=results, stats=stats)

    def _pack(self, groups: list[DocumentGroup]) -> list[OptimizedResult]:
        results: list[OptimizedResult] = []
        used_tokens = 0
        max_tokens = self._options.max_tokens

        for group in groups:
            result = self._materialize(group, select_kind(group, self._options))

            if used_tokens + result.token_count <= max_tokens:
                results.append(result)
                used_tokens += result.token_count
                continue

            remaining = max_tokens - used_tokens
            if remaining > TRUNCATION_FLOOR_TOKENS:
                truncated = self._truncate(result, remaining)
                results.append(truncated)
                used_tokens += truncated.token_count
                logger.debug(
                    "optimizer.truncated",
                    document_id=group.document_id,
                    original_tokens=result.token_count,
                    kept_tokens=truncated.token_count,
                )
            else:
                logger.debug(
                    "optimizer.budget_exhausted",
                    document_id=group.document_id,
                    remaining_tokens=remaining,
                )
            break

        return results

    def _materialize(self, group: DocumentGroup, kind: ResultKind) -> OptimizedResult:
        if kind == ResultKind.FULL_DOCUMENT:
            content = combine_hits(group.chunks)
        elif kind == ResultKind.EXPANDED_CHUNK:
            content = self._expand(group.chunks)
        else:
            content = _best_hit(group.chunks).content

        return OptimizedResult(
            document_id=group.document_id,
            content=content,
            kind=kind,
            relevance_score=group.relevance_score,
            token_count=count_tokens(content, self._tokenizer),
            chunks_found=len(group.chunks),
        )

    def _expand(self, hits: list[ScoredHit]) -> str:
        if len(hits) > 1:
            top = sorted(hits, key=lambda hit: hit.score, reverse=True)[:_EXPANDED_TOP_HITS]
            return combine_hits(top)

        best = _best_hit(hits)
        content = best.content
        if best.metadata.context_before:
            content = f"{best.metadata.context_before}\n\n{content}"
        if best.metadata.context_after:
            content = f"{content}\n\n{best.metadata.context_after}"
        return content

    def _truncate(self, result: OptimizedResult, remaining: float) -> OptimizedResult:
        keep = math.floor(remaining) - TRUNCATION_MARKER_TOKENS
        kept = truncate_to_tokens(result.content, keep, self._tokenizer)

        return result.model_copy(
            update={
                "content": kept + TRUNCATION_NOTICE,
                "token_count": min(keep, result.token_count) + TRUNCATION_MARKER_TOKENS,
                "truncated": True,
            }
        )

    def _build_stats(
        self, hits: Sequence[ScoredHit], results: list[OptimizedResult]
    ) -> OptimizationStats:
        original_tokens = sum(_hit_tokens(hit, self._tokenizer) for hit in hits)
        optimized_tokens = sum(result.token_count for result in results)

        kind_counts: dict[str, int] = {}
        for result in results:
            kind_counts[result.kind.value] = kind_counts.get(result.kind.value, 0) + 1

        return OptimizationStats(
            original_tokens=original_tokens,
            optimized_tokens=optimized_tokens,
            # Relative to the raw budget, not the utilization target
            utilization=optimized_tokens / self._options.token_budget,
            documents_returned=len(results),
            strategy=", ".join(f"{count} {kind}" for kind, count in kind_counts.items()),
        )


def optimize(
    hits: Sequence[ScoredHit],
    options: OptimizationOptions | None = None,
    tokenizer: Tokenizer | None = None,
) -> OptimizationResponse:
    """Optimize hits with a one-off optimizer."""
    return ResultOptimizer(options=options, tokenizer=tokenizer).optimize(hits)
