"""Base chunking strategy implementation."""

from abc import ABC, abstractmethod

from docs_engine.chunking.config import ChunkingConfig
from docs_engine.core.interfaces.tokenizer import Tokenizer
from docs_engine.core.models.chunk import ChunkContext, ChunkingStrategyName, ChunkType, DocumentChunk
from docs_engine.utils.tokenization import count_tokens


class BaseChunkingStrategy(ABC):
    """Base class for chunking strategies.

    Strategies receive text that is already normalized and non-empty,
    and hold no state between documents.
    """

    def __init__(self, config: ChunkingConfig, tokenizer: Tokenizer) -> None:
        self._config = config
        self._tokenizer = tokenizer

    @property
    @abstractmethod
    def name(self) -> ChunkingStrategyName:
        """The strategy this class implements."""
        ...

    @abstractmethod
    def chunk(self, text: str, document_id: str) -> list[DocumentChunk]:
        """Split normalized text into ordered chunks."""
        ...

    def _count_tokens(self, text: str) -> int:
        return count_tokens(text, self._tokenizer)

    def _create_chunk(
        self,
        document_id: str,
        content: str,
        index: int,
        start_offset: int,
        end_offset: int,
        token_count: int,
        chunk_type: ChunkType,
        context: ChunkContext | None = None,
    ) -> DocumentChunk:
        return DocumentChunk(
            document_id=document_id,
            content=content,
            index=index,
            start_offset=start_offset,
            end_offset=end_offset,
            token_count=token_count,
            chunk_type=chunk_type,
            context=context,
        )
