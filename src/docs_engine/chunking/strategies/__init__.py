"""Chunking strategy implementations."""

from docs_engine.chunking.strategies.base import BaseChunkingStrategy
from docs_engine.chunking.strategies.contextual import ContextualStrategy, find_semantic_boundaries
from docs_engine.chunking.strategies.semantic import SemanticStrategy
from docs_engine.chunking.strategies.sentence import SentenceStrategy
from docs_engine.chunking.strategies.traditional import TraditionalStrategy

__all__ = [
    "BaseChunkingStrategy",
    "ContextualStrategy",
    "SemanticStrategy",
    "SentenceStrategy",
    "TraditionalStrategy",
    "find_semantic_boundaries",
]
