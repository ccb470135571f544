"""Separator-based chunking strategy."""

from docs_engine.chunking.strategies.base import BaseChunkingStrategy
from docs_engine.chunking.strategies.traditional import TraditionalStrategy
from docs_engine.core.models.chunk import ChunkingStrategyName, ChunkType, DocumentChunk
from docs_engine.utils.text import strip_span


class SemanticStrategy(BaseChunkingStrategy):
    """Split on natural boundaries, strongest separator first.

    Every separator pass re-splits all current sections. Sections above
    ``max_chunk_size`` are forced apart with token windows.
    """

    @property
    def name(self) -> ChunkingStrategyName:
        return ChunkingStrategyName.SEMANTIC

    def chunk(self, text: str, document_id: str) -> list[DocumentChunk]:
        windows = TraditionalStrategy(self._config, self._tokenizer)
        chunks: list[DocumentChunk] = []

        for start, end in self.split_sections(text):
            start, end = strip_span(text, start, end)
            if start >= end:
                continue

            content = text[start:end]
            token_count = self._count_tokens(content)
            if token_count < self._config.min_chunk_size:
                continue

            if token_count > self._config.max_chunk_size:
                for sub_content, sub_tokens in windows.token_windows(content):
                    chunks.append(
                        self._create_chunk(
                            document_id=document_id,
                            content=sub_content,
                            index=len(chunks),
                            start_offset=start,
                            end_offset=min(start + len(sub_content), end),
                            token_count=sub_tokens,
                            chunk_type=ChunkType.TOKEN_BASED,
                        )
                    )
                continue

            chunks.append(
                self._create_chunk(
                    document_id=document_id,
                    content=content,
                    index=len(chunks),
                    start_offset=start,
                    end_offset=end,
                    token_count=token_count,
                    chunk_type=ChunkType.SEMANTIC,
                )
            )

        return chunks

    def split_sections(self, text: str) -> list[tuple[int, int]]:
        """Return ``(start, end)`` spans of text between separators, in order."""
        spans = [(0, len(text))]

        for separator in self._config.separators:
            next_spans: list[tuple[int, int]] = []
            for start, end in spans:
                pos = start
                found = text.find(separator, pos, end)
                while found != -1:
                    next_spans.append((pos, found))
                    pos = found + len(separator)
                    found = text.find(separator, pos, end)
                next_spans.append((pos, end))
            spans = next_spans

        return spans
