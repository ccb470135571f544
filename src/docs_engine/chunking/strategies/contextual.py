"""Context-preserving ("late") chunking strategy."""

import re
from bisect import bisect_right

from docs_engine.chunking.strategies.base import BaseChunkingStrategy
from docs_engine.core.models.chunk import ChunkContext, ChunkingStrategyName, ChunkType, DocumentChunk
from docs_engine.utils.text import strip_span

_HEADING_PATTERN = re.compile(r"^#+\s", re.MULTILINE)
_PARAGRAPH_BREAK = "\n\n"

# Rough English estimate used to turn a token target into a character offset.
_CHARS_PER_TOKEN = 4
# How far past the target end a boundary may still be chosen.
_BOUNDARY_REACH = 1.2
_ELLIPSIS = "..."


def find_semantic_boundaries(text: str) -> list[int]:
    """Sorted, unique offsets of document start, headings, paragraph breaks and end."""
    boundaries = {0, len(text)}
    boundaries.update(m.start() for m in _HEADING_PATTERN.finditer(text))

    pos = text.find(_PARAGRAPH_BREAK)
    while pos != -1:
        boundaries.add(pos)
        pos = text.find(_PARAGRAPH_BREAK, pos + len(_PARAGRAPH_BREAK))

    return sorted(boundaries)


class ContextualStrategy(BaseChunkingStrategy):
    """Cut near semantic boundaries and keep verbatim context on each side.

    The surrounding text lets downstream embedding or presentation recover
    meaning lost at the chunk edges.
    """

    @property
    def name(self) -> ChunkingStrategyName:
        return ChunkingStrategyName.CONTEXTUAL

    def chunk(self, text: str, document_id: str) -> list[DocumentChunk]:
        boundaries = find_semantic_boundaries(text)
        chunk_size = self._config.chunk_size
        overlap = self._config.chunk_overlap

        chunks: list[DocumentChunk] = []
        position = 0

        while position < len(text):
            chunk_end = self.find_chunk_end(len(text), position, boundaries)
            start, end = strip_span(text, position, chunk_end)
            token_count = self._count_tokens(text[start:end]) if start < end else 0

            if start >= end or token_count < self._config.min_chunk_size:
                position = chunk_end
                continue

            chunks.append(
                self._create_chunk(
                    document_id=document_id,
                    content=text[start:end],
                    index=len(chunks),
                    start_offset=start,
                    end_offset=end,
                    token_count=token_count,
                    chunk_type=ChunkType.PARAGRAPH,
                    context=self._build_context(text, start, end),
                )
            )

            position = max(position + chunk_size - overlap, chunk_end - overlap)

        return chunks

    def find_chunk_end(self, text_length: int, start: int, boundaries: list[int]) -> int:
        """Pick the boundary closest to the estimated end of a chunk starting at *start*.

        Candidates lie after *start* and no farther than ``1.2 ×`` the
        estimate. Ties go to the earlier boundary. Without candidates the
        estimate itself (capped at the text end) is used.
        """
        target_end = start + self._config.chunk_size * _CHARS_PER_TOKEN
        limit = min(target_end * _BOUNDARY_REACH, text_length)

        candidates = boundaries[bisect_right(boundaries, start) : bisect_right(boundaries, limit)]
        if not candidates:
            return min(target_end, text_length)

        return min(candidates, key=lambda b: abs(b - target_end))

    def _build_context(self, text: str, start: int, end: int) -> ChunkContext:
        window = self._config.context_window_chars
        before = text[max(0, start - window) : start].strip()
        after = text[end : end + window].strip()

        return ChunkContext(
            before=f"{_ELLIPSIS}{before}" if before else None,
            after=f"{after}{_ELLIPSIS}" if after else None,
            document_length=len(text),
        )
