"""Utility functions for docs-engine."""

from docs_engine.utils.text import normalize_text, strip_span
from docs_engine.utils.tokenization import (
    TiktokenTokenizer,
    count_tokens,
    get_tokenizer,
    truncate_to_tokens,
)

__all__ = [
    "TiktokenTokenizer",
    "count_tokens",
    "get_tokenizer",
    "normalize_text",
    "strip_span",
    "truncate_to_tokens",
]
