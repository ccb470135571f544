"""Interfaces (protocols) for docs-engine collaborators."""

from docs_engine.core.interfaces.tokenizer import Tokenizer

__all__ = ["Tokenizer"]
