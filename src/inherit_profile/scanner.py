"""Comment and string aware scanning of JSON-with-comments text.

Every editing operation in this package needs to know whether a character is
structural punctuation, part of a string literal, or buried inside a comment.
This module owns the single state machine that answers that question; the
editor and region helpers only consume the spans it produces.

Key rules:
- Strings may be delimited by double or single quotes
- A backslash inside a string escapes the following character
- Line comments end before the next newline (or at end of text)
- An unterminated block comment or string consumes the rest of the text
"""

from collections.abc import Iterator
from enum import Enum
from typing import NamedTuple


class SpanKind(Enum):
    """Classification of a run of characters."""

    STRUCTURAL = "structural"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING = "string"


class Span(NamedTuple):
    """Half-open range ``text[start:end]`` sharing a single classification."""

    kind: SpanKind
    start: int
    end: int


def iter_spans(text: str) -> Iterator[Span]:
    """
    Split text into contiguous, classified spans.

    The spans cover the whole text in order without overlapping. String spans
    include their quotes, comment spans include their delimiters.

    Args:
        text: JSON-with-comments document (or fragment)

    Yields:
        Span for each run of equally classified characters

    Example:
        >>> [s.kind.name for s in iter_spans('{"a": 1} // x')]
        ['STRUCTURAL', 'STRING', 'STRUCTURAL', 'LINE_COMMENT']
    """
    length = len(text)
    structural_start = 0
    i = 0

    while i < length:
        char = text[i]
        next_char = text[i + 1] if i + 1 < length else ""

        if char == "/" and next_char == "/":
            end = text.find("\n", i)
            end = length if end == -1 else end
            kind = SpanKind.LINE_COMMENT
        elif char == "/" and next_char == "*":
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            kind = SpanKind.BLOCK_COMMENT
        elif char in ('"', "'"):
            end = _find_string_end(text, i)
            kind = SpanKind.STRING
        else:
            i += 1
            continue

        if structural_start < i:
            yield Span(SpanKind.STRUCTURAL, structural_start, i)
        yield Span(kind, i, end)
        i = end
        structural_start = end

    if structural_start < length:
        yield Span(SpanKind.STRUCTURAL, structural_start, length)


def _find_string_end(text: str, start: int) -> int:
    """Return the index just past the closing quote of the string at ``start``."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return i + 1
        i += 1
    return len(text)


def iter_meaningful_indices(text: str) -> Iterator[int]:
    """
    Yield indices of meaningful characters in ascending order.

    Meaningful characters are non-whitespace structural characters and every
    character of a string literal (quotes included). Comment text never is.
    """
    for span in iter_spans(text):
        if span.kind is SpanKind.STRING:
            yield from range(span.start, span.end)
        elif span.kind is SpanKind.STRUCTURAL:
            for i in range(span.start, span.end):
                if not text[i].isspace():
                    yield i


def last_meaningful_index(text: str) -> int | None:
    """Return the index of the last meaningful character, or None if there is none."""
    return last_two_meaningful_indices(text)[1]


def last_two_meaningful_indices(text: str) -> tuple[int | None, int | None]:
    """
    Return the indices of the last two meaningful characters.

    Returns:
        Tuple of (second-to-last, last); either may be None
    """
    previous: int | None = None
    last: int | None = None
    for index in iter_meaningful_indices(text):
        previous, last = last, index
    return previous, last


def first_structural_index(text: str, char: str) -> int | None:
    """Return the index of the first structural occurrence of ``char``."""
    for span in iter_spans(text):
        if span.kind is SpanKind.STRUCTURAL:
            found = text.find(char, span.start, span.end)
            if found != -1:
                return found
    return None



def last_structural_index(text: str, char: str) -> int | None:
    """Return the index of the last structural occurrence of ``char``."""
    found = None
    for span in iter_spans(text):
        if span.kind is SpanKind.STRUCTURAL:
            index = text.rfind(char, span.start, span.end)
            if index != -1:
                found = index
    return found
