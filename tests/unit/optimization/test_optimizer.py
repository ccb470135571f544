"""Tests for the document-centric result optimizer."""

import pytest
from structlog.testing import capture_logs

from docs_engine.config.settings import Settings
from docs_engine.core.exceptions import ConfigurationError
from docs_engine.core.models.search import DocumentGroup, HitMetadata, ResultKind, ScoredHit
from docs_engine.optimization import (
    OptimizationOptions,
    ResultOptimizer,
    build_optimization_options,
    combine_hits,
    group_hits,
    optimize,
    score_groups,
    select_kind,
)
from docs_engine.optimization import optimizer as optimizer_module
from docs_engine.optimization.optimizer import (
    CHUNK_SEPARATOR,
    TRUNCATION_MARKER_TOKENS,
    TRUNCATION_NOTICE,
)


def _hit(
    document_id: str,
    content: str,
    score: float,
    chunk_index: int | None = None,
    token_count: int | None = None,
    before: str | None = None,
    after: str | None = None,
) -> ScoredHit:
    return ScoredHit(
        document_id=document_id,
        content=content,
        score=score,
        metadata=HitMetadata(
            chunk_index=chunk_index,
            token_count=token_count,
            context_before=before,
            context_after=after,
        ),
    )


def _optimizer(tokenizer, **options) -> ResultOptimizer:
    return ResultOptimizer(build_optimization_options(**options), tokenizer=tokenizer)


def _group(*scores: float) -> DocumentGroup:
    group = DocumentGroup(
        document_id="doc", chunks=[_hit("doc", f"c{i}", s) for i, s in enumerate(scores)]
    )
    return score_groups([group])[0]


@pytest.mark.unit
class TestOptimizationOptions:
    """Tests for option validation."""

    def test_defaults(self) -> None:
        options = build_optimization_options()

        assert options.token_budget == 10000
        assert options.full_document_threshold == 3
        assert options.expanded_chunk_multiplier == 2.0
        assert options.target_utilization == 0.9
        assert options.max_tokens == pytest.approx(9000)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"token_budget": 0},
            {"target_utilization": 0},
            {"target_utilization": 1.5},
            {"full_document_threshold": 0},
        ],
    )
    def test_invalid_options(self, overrides) -> None:
        with pytest.raises(ConfigurationError):
            build_optimization_options(**overrides)

    def test_from_settings(self) -> None:
        settings = Settings(token_budget=4000, full_document_threshold=2, target_utilization=0.5)
        options = OptimizationOptions.from_settings(settings)

        assert options.token_budget == 4000
        assert options.full_document_threshold == 2
        assert options.max_tokens == pytest.approx(2000)


@pytest.mark.unit
class TestGroupingAndScoring:
    """Tests for grouping, scoring and strategy selection."""

    def test_partition(self, char_tokenizer) -> None:
        hits = [
            _hit("a", "one", 0.5),
            _hit("b", "two", 0.4),
            _hit("a", "three", 0.3),
            _hit("c", "four", 0.9),
            _hit("b", "five", 0.1),
        ]

        groups = group_hits(hits, char_tokenizer)

        assert [g.document_id for g in groups] == ["a", "b", "c"]
        assert sum(len(g.chunks) for g in groups) == len(hits)
        assert groups[0].total_tokens == len("one") + len("three")

    def test_total_tokens_prefers_metadata(self, char_tokenizer) -> None:
        groups = group_hits([_hit("a", "abc", 0.5, token_count=100)], char_tokenizer)
        assert groups[0].total_tokens == 100

    def test_relevance_is_count_times_average(self) -> None:
        group = _group(0.6, 0.4)
        assert group.avg_score == pytest.approx(0.5)
        assert group.relevance_score == pytest.approx(1.0)

    def test_bonus_applied_once(self) -> None:
        group = _group(0.9, 0.9, 0.9)
        assert group.relevance_score == pytest.approx(3 * 0.9 * 1.5)

    def test_no_bonus_for_moderate_average(self) -> None:
        assert _group(0.5, 0.75, 1.0).relevance_score == pytest.approx(2.25)

    def test_no_bonus_with_two_chunks(self) -> None:
        assert _group(0.95, 0.95).relevance_score == pytest.approx(1.9)

    @pytest.mark.parametrize(
        ("scores", "expected"),
        [
            ((0.9, 0.8, 0.8), ResultKind.FULL_DOCUMENT),
            ((0.7, 0.7, 0.7), ResultKind.EXPANDED_CHUNK),
            ((0.2, 0.3), ResultKind.EXPANDED_CHUNK),
            ((0.9,), ResultKind.EXPANDED_CHUNK),
            ((0.85,), ResultKind.CHUNK),
            ((0.5,), ResultKind.CHUNK),
        ],
    )
    def test_select_kind(self, scores, expected) -> None:
        options = build_optimization_options(full_document_threshold=3)
        assert select_kind(_group(*scores), options) == expected

    def test_combine_hits_orders_by_chunk_index(self) -> None:
        hits = [
            _hit("a", " second ", 0.5, chunk_index=2),
            _hit("a", "unknown", 0.5),
            _hit("a", "first", 0.5, chunk_index=1),
        ]
        assert combine_hits(hits) == CHUNK_SEPARATOR.join(["unknown", "first", "second"])


@pytest.mark.unit
class TestResultOptimizer:
    """Tests for the full optimize call."""

    def test_empty_hits(self, char_tokenizer) -> None:
        response = _optimizer(char_tokenizer).optimize([])

        assert response.results == []
        assert response.stats.utilization == 0
        assert response.stats.original_tokens == 0
        assert response.stats.documents_returned == 0

    def test_full_document_ranked_first(self, char_tokenizer) -> None:
        hits = [_hit("x", f"part {i}", 0.9, chunk_index=i) for i in (3, 1, 0, 4, 2)]
        hits.append(_hit("y", "lonely", 0.5))

        response = _optimizer(char_tokenizer, full_document_threshold=3).optimize(hits)

        x, y = response.results
        assert x.document_id == "x"
        assert x.kind == ResultKind.FULL_DOCUMENT
        assert x.relevance_score == pytest.approx(5 * 0.9 * 1.5)
        assert x.chunks_found == 5
        assert x.content == CHUNK_SEPARATOR.join(f"part {i}" for i in range(5))
        assert y.document_id == "y"
        assert y.kind == ResultKind.CHUNK
        assert y.content == "lonely"

    def test_token_count_measured_on_materialized_content(self, char_tokenizer) -> None:
        hits = [
            _hit("a", "aa", 0.9, chunk_index=0, token_count=1),
            _hit("a", "bb", 0.9, chunk_index=1, token_count=1),
        ]
        response = _optimizer(char_tokenizer, full_document_threshold=2).optimize(hits)

        result = response.results[0]
        assert result.content == f"aa{CHUNK_SEPARATOR}bb"
        assert result.token_count == len(result.content)

    def test_expanded_single_hit_uses_context(self, char_tokenizer) -> None:
        hits = [_hit("a", "core", 0.9, before="...before", after="after...")]

        result = _optimizer(char_tokenizer).optimize(hits).results[0]

        assert result.kind == ResultKind.EXPANDED_CHUNK
        assert result.content == "...before\n\ncore\n\nafter..."

    def test_expanded_multi_hit_combines_top_three(self, char_tokenizer) -> None:
        hits = [
            _hit("a", "c0", 0.3, chunk_index=0, before="ignored"),
            _hit("a", "c1", 0.9, chunk_index=1, before="ignored"),
            _hit("a", "c2", 0.6, chunk_index=2),
            _hit("a", "c3", 0.8, chunk_index=3),
        ]

        result = _optimizer(char_tokenizer, full_document_threshold=5).optimize(hits).results[0]

        assert result.kind == ResultKind.EXPANDED_CHUNK
        assert result.content == CHUNK_SEPARATOR.join(["c1", "c2", "c3"])
        assert result.chunks_found == 4

    def test_chunk_takes_first_best_hit(self, char_tokenizer) -> None:
        hits = [_hit("a", "first", 0.5)]
        result = _optimizer(char_tokenizer).optimize(hits).results[0]
        assert result.content == "first"

    def test_ties_keep_input_order(self, char_tokenizer) -> None:
        hits = [_hit("b", "bee", 0.5), _hit("a", "ay", 0.5), _hit("c", "sea", 0.5)]

        response = _optimizer(char_tokenizer).optimize(hits)

        assert [r.document_id for r in response.results] == ["b", "a", "c"]

    def test_second_group_excluded_below_truncation_floor(self, char_tokenizer) -> None:
        hits = [
            _hit("a", "a" * 600, 0.6),
            _hit("b", "b" * 600, 0.5),
            _hit("c", "c" * 10, 0.4),
        ]

        response = _optimizer(
            char_tokenizer, token_budget=1000, target_utilization=0.9
        ).optimize(hits)

        assert [r.document_id for r in response.results] == ["a"]
        assert response.stats.documents_returned == 1
        assert response.stats.optimized_tokens == 600
        assert response.stats.utilization == pytest.approx(0.6)

    def test_truncates_first_group_that_does_not_fit(self, char_tokenizer) -> None:
        hits = [
            _hit("a", "a" * 1200, 0.6),
            _hit("b", "b" * 1500, 0.5),
            _hit("c", "c" * 10, 0.1),
        ]

        response = _optimizer(
            char_tokenizer, token_budget=2000, target_utilization=1.0
        ).optimize(hits)

        first, second = response.results
        assert not first.truncated
        assert second.truncated
        kept = 2000 - 1200 - TRUNCATION_MARKER_TOKENS
        assert second.content == "b" * kept + TRUNCATION_NOTICE
        assert second.token_count == kept + TRUNCATION_MARKER_TOKENS
        assert response.stats.optimized_tokens == 2000
        assert response.stats.documents_returned == 2

    @pytest.mark.parametrize("budget", [600, 1000, 1500, 2500, 5000])
    @pytest.mark.parametrize("utilization", [0.5, 0.9, 1.0])
    def test_budget_respected(self, char_tokenizer, budget, utilization) -> None:
        hits = [
            _hit(f"doc{i % 4}", chr(ord("a") + i) * (150 + 40 * i), 0.5 + i * 0.04, chunk_index=i)
            for i in range(12)
        ]

        response = _optimizer(
            char_tokenizer, token_budget=budget, target_utilization=utilization
        ).optimize(hits)

        total = sum(r.token_count for r in response.results)
        assert total <= budget * utilization + TRUNCATION_MARKER_TOKENS
        assert total == response.stats.optimized_tokens

    def test_stats(self, char_tokenizer) -> None:
        hits = [_hit("x", f"part {i}", 0.9, chunk_index=i) for i in range(3)]
        hits.append(_hit("y", "abc", 0.2, token_count=100))

        stats = _optimizer(char_tokenizer, token_budget=1000).optimize(hits).stats

        assert stats.original_tokens == 3 * len("part 0") + 100
        assert stats.documents_returned == 2
        assert stats.strategy == "1 full_document, 1 chunk"
        assert stats.utilization == pytest.approx(stats.optimized_tokens / 1000)

    def test_optimize_function(self, char_tokenizer) -> None:
        hits = [_hit("a", "text", 0.4)]
        response = optimize(hits, tokenizer=char_tokenizer)
        assert response.results[0].kind == ResultKind.CHUNK

    def test_logs_completion(self, char_tokenizer) -> None:
        with capture_logs() as logs:
            _optimizer(char_tokenizer).optimize([_hit("a", "text", 0.4)])

        events = [entry for entry in logs if entry["event"] == "optimizer.complete"]
        assert len(events) == 1
        assert events[0]["documents_returned"] == 1

    def test_truncation_goes_through_token_helper(self, char_tokenizer, monkeypatch) -> None:
        calls: list[int] = []
        real_truncate = optimizer_module.truncate_to_tokens

        def recording_truncate(text, max_tokens, tokenizer=None):
            calls.append(max_tokens)
            return real_truncate(text, max_tokens, tokenizer)

        monkeypatch.setattr(optimizer_module, "truncate_to_tokens", recording_truncate)
        hits = [_hit("a", "a" * 1200, 0.6), _hit("b", "b" * 1500, 0.5)]

        response = _optimizer(
            char_tokenizer, token_budget=2000, target_utilization=1.0
        ).optimize(hits)

        assert calls == [2000 - 1200 - TRUNCATION_MARKER_TOKENS]
        assert response.results[1].truncated

    def test_full_document_separator_literal(self) -> None:
        assert CHUNK_SEPARATOR == "\n\n--- \n\n"
