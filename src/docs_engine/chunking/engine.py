"""Chunking engine: normalizes a document and applies the configured strategy."""

from collections.abc import Mapping

from docs_engine.chunking.config import ChunkingConfig, build_chunking_config
from docs_engine.chunking.strategies import (
    BaseChunkingStrategy,
    ContextualStrategy,
    SemanticStrategy,
    SentenceStrategy,
    TraditionalStrategy,
)
from docs_engine.config.logging import get_logger
from docs_engine.core.exceptions import ChunkingError, ConfigurationError
from docs_engine.core.interfaces.tokenizer import Tokenizer
from docs_engine.core.models.chunk import ChunkingStrategyName, DocumentChunk
from docs_engine.utils.text import normalize_text
from docs_engine.utils.tokenization import get_tokenizer

logger = get_logger(__name__)

STRATEGIES: dict[ChunkingStrategyName, type[BaseChunkingStrategy]] = {
    ChunkingStrategyName.TRADITIONAL: TraditionalStrategy,
    ChunkingStrategyName.SEMANTIC: SemanticStrategy,
    ChunkingStrategyName.SENTENCE: SentenceStrategy,
    ChunkingStrategyName.CONTEXTUAL: ContextualStrategy,
}


class ChunkingEngine:
    """Splits documents into context-aware chunks.

    The engine is stateless across documents, so one instance may be
    shared by concurrent callers chunking different documents.
    """

    def __init__(
        self,
        config: ChunkingConfig | None = None,
        tokenizer: Tokenizer | None = None,
    ) -> None:
        self._config = config or build_chunking_config()
        self._tokenizer = tokenizer or get_tokenizer()
        self._strategy = self._create_strategy()

    @property
    def config(self) -> ChunkingConfig:
        return self._config

    def _create_strategy(self) -> BaseChunkingStrategy:
        strategy_cls = STRATEGIES.get(self._config.strategy)
        if strategy_cls is None:
            raise ConfigurationError(
                f"Unsupported chunking strategy: {self._config.strategy}",
                details={"strategy": str(self._config.strategy)},
            )
        return strategy_cls(self._config, self._tokenizer)

    def chunk(self, document_text: str, document_id: str) -> list[DocumentChunk]:
        """Chunk one document.

        Empty documents and documents too small for ``min_chunk_size``
        produce an empty list.

        Raises:
            ChunkingError: If the strategy fails unexpectedly.
        """
        log = logger.bind(document_id=document_id, strategy=self._strategy.name.value)
        text = normalize_text(document_text)
        if not text:
            log.debug("chunker.empty_document")
            return []

        log.debug("chunker.start", length=len(text))
        try:
            chunks = self._strategy.chunk(text, document_id)
        except (ValueError, IndexError) as e:
            raise ChunkingError(
                f"Failed to chunk document {document_id}",
                details={"document_id": document_id, "error": str(e)},
            ) from e

        log.debug("chunker.complete", total_chunks=len(chunks))
        return chunks

    def chunk_many(self, documents: Mapping[str, str]) -> dict[str, list[DocumentChunk]]:
        """Chunk several documents keyed by document id."""
        return {
            document_id: self.chunk(text, document_id)
            for document_id, text in documents.items()
        }

    def embedding_text(self, chunk: DocumentChunk) -> str:
        """Text to embed for *chunk*.

        Contextual chunks carry their surrounding context when
        ``use_contextual_embeddings`` is enabled.
        """
        if (
            self._config.strategy == ChunkingStrategyName.CONTEXTUAL
            and self._config.use_contextual_embeddings
        ):
            return chunk.contextual_text()
        return chunk.content


def chunk_document(
    document_text: str,
    document_id: str,
    config: ChunkingConfig | None = None,
    tokenizer: Tokenizer | None = None,
) -> list[DocumentChunk]:
    """Chunk a single document with a one-off engine."""
    return ChunkingEngine(config=config, tokenizer=tokenizer).chunk(document_text, document_id)
