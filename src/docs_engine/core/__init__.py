"""Core domain models and interfaces for docs-engine."""

from docs_engine.core.exceptions import ChunkingError, ConfigurationError, DocsEngineError
from docs_engine.core.interfaces import Tokenizer
from docs_engine.core.models import (
    ChunkContext,
    ChunkingStrategyName,
    ChunkType,
    DocumentChunk,
    DocumentGroup,
    HitMetadata,
    OptimizationResponse,
    OptimizationStats,
    OptimizedResult,
    ResultKind,
    ScoredHit,
)

__all__ = [
    # Models
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
    # Interfaces
    "Tokenizer",
    # Exceptions
    "DocsEngineError",
    "ConfigurationError",
    "ChunkingError",
]
