"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``DOCS_ENGINE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOCS_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Tokenizer
    tokenizer_encoding: str = "o200k_base"

    # Chunking
    chunking_strategy: str = "contextual"
    chunk_size: int = 512
    chunk_overlap: int = 50
    chunk_size_min: int = 100
    chunk_size_max: int = 1000
    context_window_chars: int = 200

    # Result optimization
    token_budget: int = 10000
    full_document_threshold: int = 3
    expanded_chunk_multiplier: float = 2.0
    target_utilization: float = 0.9


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
