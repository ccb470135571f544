"""Retrieval hit and optimized result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HitMetadata(BaseModel):
    """Positional and context metadata attached to a retrieval hit."""

    model_config = ConfigDict(frozen=True, extra="allow")

    token_count: int | None = Field(default=None, ge=0)
    chunk_index: int | None = Field(default=None, ge=0)
    context_before: str | None = None
    context_after: str | None = None


class ScoredHit(BaseModel):
    """A chunk match returned by an external index, with its score."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    content: str
    score: float = Field(ge=0.0, le=1.0)
    metadata: HitMetadata = Field(default_factory=HitMetadata)

    @classmethod
    def from_index_record(cls, record: dict[str, Any], score: float) -> ScoredHit:
        """Rebuild a hit from a record written by ``DocumentChunk.to_index_record``."""
        return cls(
            document_id=record["documentId"],
            content=record["content"],
            score=score,
            metadata=HitMetadata(
                token_count=record.get("tokenCount"),
                chunk_index=record.get("chunkIndex"),
                context_before=record.get("contextBefore"),
                context_after=record.get("contextAfter"),
            ),
        )


@dataclass
class DocumentGroup:
    """All hits for one document within a single optimize call."""

    document_id: str
    chunks: list[ScoredHit] = field(default_factory=list)
    avg_score: float = 0.0
    relevance_score: float = 0.0
    total_tokens: int = 0


class ResultKind(str, Enum):
    """Presentation strategy chosen for a document group."""

    FULL_DOCUMENT = "full_document"
    EXPANDED_CHUNK = "expanded_chunk"
    CHUNK = "chunk"


class OptimizedResult(BaseModel):
    """A presentation-ready block for one document."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    content: str
    kind: ResultKind
    relevance_score: float
    token_count: int = Field(ge=0)
    chunks_found: int = Field(ge=1)
    truncated: bool = False


class OptimizationStats(BaseModel):
    """Summary of one optimize call."""

    model_config = ConfigDict(frozen=True)

    original_tokens: int = 0
    optimized_tokens: int = 0
    utilization: float = 0.0
    documents_returned: int = 0
    strategy: str = ""


class OptimizationResponse(BaseModel):
    """Optimized results ordered by descending relevance, plus stats."""

    model_config = ConfigDict(frozen=True)

    results: list[OptimizedResult] = Field(default_factory=list)
    stats: OptimizationStats = Field(default_factory=OptimizationStats)
