"""Chunk models produced by the chunking engine."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChunkingStrategyName(str, Enum):
    """Closed set of chunking strategies."""

    TRADITIONAL = "traditional"
    SEMANTIC = "semantic"
    SENTENCE = "sentence"
    CONTEXTUAL = "contextual"

    @classmethod
    def _missing_(cls, value: object) -> "ChunkingStrategyName | None":
        if isinstance(value, str):
            normalized = value.lower().strip()
            # Historical name of the contextual strategy
            if normalized == "late-chunking":
                return cls.CONTEXTUAL
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class ChunkType(str, Enum):
    """How a chunk's boundaries were chosen."""

    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"
    SEMANTIC = "semantic"
    TOKEN_BASED = "token_based"


class ChunkContext(BaseModel):
    """Verbatim source text surrounding a contextual chunk."""

    model_config = ConfigDict(frozen=True)

    before: str | None = None
    after: str | None = None
    document_length: int = Field(ge=0)


class DocumentChunk(BaseModel):
    """A contiguous slice of a document, sized for retrieval.

    Offsets are character positions in the normalized document text,
    except for token-based chunks whose offsets are chunk-local
    (``0`` to ``len(content)``).
    """

    model_config = ConfigDict(frozen=True)

    document_id: str
    content: str
    index: int = Field(ge=0)
    start_offset: int = Field(ge=0)
    end_offset: int = Field(ge=0)
    token_count: int = Field(ge=0)
    chunk_type: ChunkType
    context: ChunkContext | None = None

    def contextual_text(self) -> str:
        """Chunk content with its surrounding context spliced around it."""
        text = self.content
        if self.context is not None:
            if self.context.before:
                text = f"{self.context.before}\n\n{text}"
            if self.context.after:
                text = f"{text}\n\n{self.context.after}"
        return text

    def to_index_record(self) -> dict[str, Any]:
        """Flatten the chunk into the metadata record an index persists."""
        record: dict[str, Any] = {
            "documentId": self.document_id,
            "content": self.content,
            "chunkIndex": self.index,
            "chunkType": self.chunk_type.value,
            "tokenCount": self.token_count,
            "startOffset": self.start_offset,
            "endOffset": self.end_offset,
        }
        if self.context is not None:
            record["contextBefore"] = self.context.before
            record["contextAfter"] = self.context.after
            record["documentLength"] = self.context.document_length
        return record
