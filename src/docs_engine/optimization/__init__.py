"""Search result optimization."""

from docs_engine.optimization.config import OptimizationOptions, build_optimization_options
from docs_engine.optimization.formatting import format_result_header, format_search_response
from docs_engine.optimization.optimizer import (
    ResultOptimizer,
    combine_hits,
    group_hits,
    optimize,
    score_groups,
    select_kind,
)

__all__ = [
    "OptimizationOptions",
    "ResultOptimizer",
    "build_optimization_options",
    "combine_hits",
    "format_result_header",
    "format_search_response",
    "group_hits",
    "optimize",
    "score_groups",
    "select_kind",
]
