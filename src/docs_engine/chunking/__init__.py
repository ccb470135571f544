"""Document chunking."""

from docs_engine.chunking.config import (
    ChunkingConfig,
    build_chunking_config,
    get_chunking_config,
)
from docs_engine.chunking.engine import ChunkingEngine, chunk_document

__all__ = [
    "ChunkingConfig",
    "ChunkingEngine",
    "build_chunking_config",
    "chunk_document",
    "get_chunking_config",
]
