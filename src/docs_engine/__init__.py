"""docs-engine: context-aware chunking and token-budgeted result packing."""

from docs_engine.chunking import (
    ChunkingConfig,
    ChunkingEngine,
    build_chunking_config,
    chunk_document,
    get_chunking_config,
)
from docs_engine.core import (
    ChunkingError,
    ChunkingStrategyName,
    ConfigurationError,
    DocumentChunk,
    OptimizationResponse,
    OptimizedResult,
    ResultKind,
    ScoredHit,
)
from docs_engine.optimization import (
    OptimizationOptions,
    ResultOptimizer,
    build_optimization_options,
    format_search_response,
    optimize,
)

__version__ = "0.1.0"

__all__ = [
    "ChunkingConfig",
    "ChunkingEngine",
    "ChunkingError",
    "ChunkingStrategyName",
    "ConfigurationError",
    "DocumentChunk",
    "OptimizationOptions",
    "OptimizationResponse",
    "OptimizedResult",
    "ResultKind",
    "ResultOptimizer",
    "ScoredHit",
    "build_chunking_config",
    "build_optimization_options",
    "chunk_document",
    "format_search_response",
    "get_chunking_config",
    "optimize",
]
