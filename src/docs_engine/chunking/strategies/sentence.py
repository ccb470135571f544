"""Sentence-accumulating chunking strategy."""

import re

from docs_engine.chunking.strategies.base import BaseChunkingStrategy
from docs_engine.core.models.chunk import ChunkingStrategyName, ChunkType, DocumentChunk
from docs_engine.utils.text import strip_span

# A run of text up to terminal punctuation, a trailing unterminated
# fragment, or a stray run of punctuation.
_SENTENCE_PATTERN = re.compile(r"[^.!?]+(?:[.!?]+|$)|[.!?]+")


class SentenceStrategy(BaseChunkingStrategy):
    """Greedily pack whole sentences into chunks of up to ``chunk_size`` tokens."""

    @property
    def name(self) -> ChunkingStrategyName:
        return ChunkingStrategyName.SENTENCE

    def chunk(self, text: str, document_id: str) -> list[DocumentChunk]:
        spans = [(m.start(), m.end()) for m in _SENTENCE_PATTERN.finditer(text)]
        chunks: list[DocumentChunk] = []
        buffer_start: int | None = None
        buffer_end = 0

        for start, end in spans:
            if buffer_start is None:
                buffer_start, buffer_end = start, end
                continue

            if self._count_tokens(text[buffer_start:end]) > self._config.chunk_size:
                self._emit(chunks, text, document_id, buffer_start, buffer_end, final=False)
                buffer_start = start
            buffer_end = end

        if buffer_start is not None:
            self._emit(chunks, text, document_id, buffer_start, buffer_end, final=True)

        return chunks

    def _emit(
        self,
        chunks: list[DocumentChunk],
        text: str,
        document_id: str,
        start: int,
        end: int,
        final: bool,
    ) -> None:
        start, end = strip_span(text, start, end)
        if start >= end:
            return

        content = text[start:end]
        token_count = self._count_tokens(content)
        # The last buffer is kept whatever its size.
        if not final and token_count < self._config.min_chunk_size:
            return

        chunks.append(
            self._create_chunk(
                document_id=document_id,
                content=content,
                index=len(chunks),
                start_offset=start,
                end_offset=end,
                token_count=token_count,
                chunk_type=ChunkType.SENTENCE,
            )
        )
