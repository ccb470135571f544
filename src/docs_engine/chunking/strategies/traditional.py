"""Token-window chunking strategy."""

from docs_engine.chunking.strategies.base import BaseChunkingStrategy
from docs_engine.core.models.chunk import ChunkingStrategyName, ChunkType, DocumentChunk


class TraditionalStrategy(BaseChunkingStrategy):
    """Fixed-size token windows with overlap.

    Offsets are not mapped back to the source: each chunk reports
    ``[0, len(content))``.
    """

    @property
    def name(self) -> ChunkingStrategyName:
        return ChunkingStrategyName.TRADITIONAL

    def chunk(self, text: str, document_id: str) -> list[DocumentChunk]:
        chunks: list[DocumentChunk] = []
        for content, token_count in self.token_windows(text):
            chunks.append(
                self._create_chunk(
                    document_id=document_id,
                    content=content,
                    index=len(chunks),
                    start_offset=0,
                    end_offset=len(content),
                    token_count=token_count,
                    chunk_type=ChunkType.TOKEN_BASED,
                )
            )
        return chunks

    def token_windows(self, text: str) -> list[tuple[str, int]]:
        """Decode each window of ``chunk_size`` tokens.

        Returns ``(content, token_count)`` pairs, skipping windows shorter
        than ``min_chunk_size`` and windows that decode to whitespace.
        """
        tokens = self._tokenizer.encode(text)
        step = self._config.chunk_size - self._config.chunk_overlap
        windows: list[tuple[str, int]] = []

        for i in range(0, len(tokens), step):
            window = tokens[i : i + self._config.chunk_size]
            if len(window) < self._config.min_chunk_size:
                continue
            content = self._tokenizer.decode(window).strip()
            if content:
                windows.append((content, len(window)))

        return windows
