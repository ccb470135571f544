"""Custom exceptions for docs-engine."""


class DocsEngineError(Exception):
    """Base exception for all docs-engine errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DocsEngineError):
    """Raised when a configuration value violates its invariants."""

    pass


class ChunkingError(DocsEngineError):
    """Raised when a chunking strategy fails on a document."""

    pass
