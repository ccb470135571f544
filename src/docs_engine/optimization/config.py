"""Result optimization options."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docs_engine.config.settings import Settings
from docs_engine.core.exceptions import ConfigurationError


class OptimizationOptions(BaseModel):
    """Budget and threshold settings for one optimize call."""

    model_config = ConfigDict(frozen=True)

    token_budget: int = Field(default=10000, gt=0, description="Maximum output tokens")
    full_document_threshold: int = Field(
        default=3, ge=1, description="Minimum matched chunks for full-document treatment"
    )
    expanded_chunk_multiplier: float = Field(
        default=2.0, gt=0, description="Expansion factor for single chunks"
    )
    target_utilization: float = Field(
        default=0.9, gt=0, le=1, description="Share of the token budget to fill"
    )

    @property
    def max_tokens(self) -> float:
        """Token ceiling used for packing."""
        return self.token_budget * self.target_utilization

    @classmethod
    def from_settings(cls, settings: Settings) -> "OptimizationOptions":
        """Build options from environment settings."""
        return build_optimization_options(
            token_budget=settings.token_budget,
            full_document_threshold=settings.full_document_threshold,
            expanded_chunk_multiplier=settings.expanded_chunk_multiplier,
            target_utilization=settings.target_utilization,
        )


def build_optimization_options(**overrides: Any) -> OptimizationOptions:
    """Build fully-defaulted, validated optimization options.

    Raises:
        ConfigurationError: If a value is out of range.
    """
    try:
        return OptimizationOptions(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid optimization options",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
