"""Text normalization helpers."""

import re

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_HORIZONTAL_WHITESPACE = re.compile(r"[ \t]+")


def normalize_text(content: str) -> str:
    """Normalize line endings and whitespace runs, then strip.

    ``\\r\\n`` becomes ``\\n``, three or more newlines collapse to a blank
    line, and runs of spaces or tabs collapse to a single space.
    """
    content = content.replace("\r\n", "\n")
    content = _EXCESS_BLANK_LINES.sub("\n\n", content)
    content = _HORIZONTAL_WHITESPACE.sub(" ", content)
    return content.strip()


def strip_span(text: str, start: int, end: int) -> tuple[int, int]:
    """Shrink ``[start, end)`` so ``text[start:end]`` has no outer whitespace."""
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end
