"""Tokenizer protocol."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Tokenizer(Protocol):
    """Pure, deterministic text <-> token id conversion.

    Implementations must satisfy ``decode(encode(text)) == text`` and be
    safe to call concurrently from independent chunking or optimization
    passes.
    """

    def encode(self, text: str) -> list[int]:
        """Convert text into a sequence of token ids."""
        ...

    def decode(self, ids: Sequence[int]) -> str:
        """Convert a sequence of token ids back into text."""
        ...
