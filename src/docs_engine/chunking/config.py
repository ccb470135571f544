"""Chunking configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from docs_engine.config.settings import Settings
from docs_engine.core.exceptions import ConfigurationError
from docs_engine.core.models.chunk import ChunkingStrategyName

DEFAULT_SEPARATORS = ("\n\n", "\n", ". ", "! ", "? ")


class ChunkingConfig(BaseModel):
    """Configuration for one chunking pass.

    Sizes are measured in tokens, ``context_window_chars`` in characters.
    Construct through :func:`build_chunking_config` to get
    :class:`ConfigurationError` instead of a pydantic ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)

    strategy: ChunkingStrategyName = Field(
        default=ChunkingStrategyName.CONTEXTUAL, description="Chunking strategy to use"
    )

    # Size constraints
    chunk_size: int = Field(default=512, gt=0, description="Target chunk size in tokens")
    chunk_overlap: int = Field(default=50, ge=0, description="Overlap between chunks in tokens")
    min_chunk_size: int = Field(default=100, ge=0, description="Minimum chunk size in tokens")
    max_chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in tokens")

    # Contextual strategy
    context_window_chars: int = Field(
        default=200, ge=0, description="Characters of surrounding context kept per side"
    )
    use_contextual_embeddings: bool = Field(
        default=True, description="Embed chunks together with their surrounding context"
    )

    # Semantic strategy
    separators: tuple[str, ...] = Field(
        default=DEFAULT_SEPARATORS, description="Boundary markers, strongest first"
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def _parse_strategy(cls, v: Any) -> Any:
        if isinstance(v, str) and not isinstance(v, ChunkingStrategyName):
            return ChunkingStrategyName(v)
        return v

    @field_validator("separators")
    @classmethod
    def _check_separators(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("at least one separator is required")
        if any(not sep for sep in v):
            raise ValueError("separators must be non-empty strings")
        return v

    @model_validator(mode="after")
    def _check_sizes(self) -> "ChunkingConfig":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        if not self.min_chunk_size <= self.chunk_size <= self.max_chunk_size:
            raise ValueError(
                "expected min_chunk_size <= chunk_size <= max_chunk_size, got "
                f"{self.min_chunk_size} / {self.chunk_size} / {self.max_chunk_size}"
            )
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChunkingConfig":
        """Build a config from environment settings."""
        return build_chunking_config(
            strategy=settings.chunking_strategy,
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            min_chunk_size=settings.chunk_size_min,
            max_chunk_size=settings.chunk_size_max,
            context_window_chars=settings.context_window_chars,
        )


def build_chunking_config(**overrides: Any) -> ChunkingConfig:
    """Build a fully-defaulted, validated chunking config.

    Raises:
        ConfigurationError: If a value is unknown or an invariant fails.
    """
    try:
        return ChunkingConfig(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid chunking configuration",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def get_chunking_config(use_case: str) -> ChunkingConfig:
    """Get a preset configuration for a kind of content.

    Known use cases: ``documentation``, ``articles``, ``code`` and ``qa``.
    Anything else gets the contextual defaults.
    """
    base: dict[str, Any] = {"chunk_overlap": 50, "min_chunk_size": 100}

    if use_case == "documentation":
        return build_chunking_config(
            **base,
            strategy=ChunkingStrategyName.CONTEXTUAL,
            chunk_size=512,
            max_chunk_size=800,
            separators=("\n## ", "\n### ", "\n\n", "\n"),
        )
    if use_case == "articles":
        return build_chunking_config(
            **base,
            strategy=ChunkingStrategyName.SEMANTIC,
            chunk_size=256,
            max_chunk_size=512,
            separators=("\n\n", ". ", "! ", "? "),
        )
    if use_case == "code":
        return build_chunking_config(
            **base,
            strategy=ChunkingStrategyName.SEMANTIC,
            chunk_size=1024,
            max_chunk_size=2048,
            separators=("\n\nclass ", "\n\nfunction ", "\n\ndef ", "\n\n"),
        )
    if use_case == "qa":
        return build_chunking_config(
            strategy=ChunkingStrategyName.SENTENCE,
            chunk_size=128,
            chunk_overlap=20,
            min_chunk_size=100,
            max_chunk_size=256,
        )
    return build_chunking_config(
        **base,
        strategy=ChunkingStrategyName.CONTEXTUAL,
        chunk_size=512,
        max_chunk_size=1000,
    )
