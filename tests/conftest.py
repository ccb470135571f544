"""Shared fixtures: deterministic tokenizer doubles.

``CharTokenizer`` makes token counts equal character counts, which keeps
budget arithmetic in tests exact. ``QuadCharTokenizer`` approximates the
four-characters-per-token ratio the contextual strategy assumes.
"""

from collections.abc import Sequence

import pytest


class CharTokenizer:
    """One token per character."""

    def encode(self, text: str) -> list[int]:
        return [ord(c) for c in text]

    def decode(self, ids: Sequence[int]) -> str:
        return "".join(chr(i) for i in ids)


class QuadCharTokenizer:
    """One token per four-character piece."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._pieces: list[str] = []

    def encode(self, text: str) -> list[int]:
        ids = []
        for i in range(0, len(text), 4):
            piece = text[i : i + 4]
            if piece not in self._ids:
                self._ids[piece] = len(self._pieces)
                self._pieces.append(piece)
            ids.append(self._ids[piece])
        return ids

    def decode(self, ids: Sequence[int]) -> str:
        return "".join(self._pieces[i] for i in ids)


@pytest.fixture
def char_tokenizer() -> CharTokenizer:
    return CharTokenizer()


@pytest.fixture
def quad_tokenizer() -> QuadCharTokenizer:
    return QuadCharTokenizer()
