"""Tokenization utilities."""

from collections.abc import Sequence
from functools import lru_cache

import tiktoken

from docs_engine.config.settings import get_settings
from docs_engine.core.interfaces.tokenizer import Tokenizer


class TiktokenTokenizer:
    """Tokenizer backed by a tiktoken encoding."""

    def __init__(self, encoding_name: str = "o200k_base") -> None:
        self.encoding_name = encoding_name
        self._encoding = tiktoken.get_encoding(encoding_name)

    def encode(self, text: str) -> list[int]:
        # Special-token markers in documentation are ordinary text here.
        return self._encoding.encode(text, disallowed_special=())

    def decode(self, ids: Sequence[int]) -> str:
        return self._encoding.decode(list(ids))


@lru_cache
def get_tokenizer(encoding_name: str | None = None) -> TiktokenTokenizer:
    """Get a cached tokenizer, defaulting to the configured encoding."""
    return TiktokenTokenizer(encoding_name or get_settings().tokenizer_encoding)


def count_tokens(text: str, tokenizer: Tokenizer | None = None) -> int:
    """Count the number of tokens in text."""
    tokenizer = tokenizer or get_tokenizer()
    return len(tokenizer.encode(text))


def truncate_to_tokens(text: str, max_tokens: int, tokenizer: Tokenizer | None = None) -> str:
    """Truncate text to a maximum number of tokens."""
    tokenizer = tokenizer or get_tokenizer()
    tokens = tokenizer.encode(text)

    if len(tokens) <= max_tokens:
        return text

    return tokenizer.decode(tokens[: max(0, max_tokens)])
