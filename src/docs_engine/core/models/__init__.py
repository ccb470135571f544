"""Core domain models."""

from docs_engine.core.models.chunk import (
    ChunkContext,
    ChunkingStrategyName,
    ChunkType,
    DocumentChunk,
)
from docs_engine.core.models.search import (
    DocumentGroup,
    HitMetadata,
    OptimizationResponse,
    OptimizationStats,
    OptimizedResult,
    ResultKind,
    ScoredHit,
)

__all__ = [
    "ChunkContext",
    "ChunkType",
    "ChunkingStrategyName",
    "DocumentChunk",
    "DocumentGroup",
    "HitMetadata",
    "OptimizationResponse",
    "OptimizationStats",
    "OptimizedResult",
    "ResultKind",
    "ScoredHit",
]
