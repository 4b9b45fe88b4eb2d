"""Surgical edits on JSON-with-comments documents.

These helpers never re-serialize a document. They locate positions with the
scanner and splice text in or out, so comments, blank lines and the author's
formatting survive every edit.
"""

import logging
import re

from .scanner import last_meaningful_index
from .scanner import last_structural_index
from .scanner import last_two_meaningful_indices

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "    "

_LEADING_WHITESPACE = re.compile(r"^( +|\t+)")
_TRAILING_WHITESPACE = re.compile(r"\s*\Z")


def remove_trailing_comma(text: str) -> str:
    """
    Remove the last trailing comma from a document.

    A trailing comma is either the last meaningful character, or the
    second-to-last one when the last is a closing ``}`` or ``]``. Commas inside
    comments and strings are never touched.

    Args:
        text: JSON-with-comments text

    Returns:
        Text without the trailing comma, or the original text

    Example:
        >>> remove_trailing_comma('{ "a": 1, }')
        '{ "a": 1 }'
        >>> remove_trailing_comma('{ "a": "x," }')
        '{ "a": "x," }'
    """
    previous, last = last_two_meaningful_indices(text)
    if last is None:
        return text

    if text[last] == ",":
        return text[:last] + text[last + 1 :]

    if text[last] in "}]" and previous is not None and text[previous] == ",":
        return text[:previous] + text[previous + 1 :]

    return text


def split_at_final_close(text: str) -> tuple[str, str]:
    """
    Split a document at its final closing brace.

    The last ``}`` outside comments and strings is assumed to close the
    top-level object, so a comment after the object may mention braces.

    Returns:
        (before, after) where ``after`` starts with the brace. A document
        without any brace yields an empty-object shell ``("{\\n", "}\\n")``.
    """
    closing_index = last_structural_index(text, "}")
    if closing_index is None:
        return "{\n", "}\n"
    return text[:closing_index], text[closing_index:]


def detect_indent_unit(text: str) -> str:
    """
    Detect the indentation unit used by a document.

    The first indented, non-blank line decides: a leading tab means ``"\\t"``,
    otherwise the run of leading spaces. Defaults to four spaces.
    """
    for line in text.splitlines():
        if not line.strip():
            continue
        match = _LEADING_WHITESPACE.match(line)
        if not match:
            continue
        indent = match.group(1)
        if indent[0] == "\t":
            return "\t"
        return indent

    return DEFAULT_INDENT


def detect_newline(text: str) -> str:
    """
    Return the line ending used by most lines of a document.

    Example:
        >>> detect_newline("{\\r\\n}\\r\\n")
        '\\r\\n'
    """
    crlf = text.count("\r\n")
    return "\r\n" if crlf > text.count("\n") - crlf else "\n"


def insert_before_close(before: str, block: str, newline: str = "\n") -> str:
    """
    Append a block of entries to the part of a document before its closing brace.

    A separating comma is inserted right after the last meaningful character
    when that character is neither ``{`` nor ``,``. Anything after it (usually
    a trailing comment) is kept verbatim apart from trailing whitespace, which
    collapses to a single ``newline``.

    Args:
        before: Document text up to (excluding) the closing brace
        block: Newline-terminated lines to insert
        newline: Line ending used when trailing whitespace is collapsed

    Returns:
        ``before`` plus ``block``, still without the closing brace

    Example:
        >>> insert_before_close('{\\n  "x": 1 // keep\\n', '  "y": 2\\n')
        '{\\n  "x": 1, // keep\\n  "y": 2\\n'
    """
    index = last_meaningful_index(before)
    if index is None:
        logger.warning("No meaningful text found before the closing brace; appending block as-is")
        return _TRAILING_WHITESPACE.sub(newline, before, count=1) + block

    if before[index] in "{,":
        return _TRAILING_WHITESPACE.sub(newline, before, count=1) + block

    head = before[: index + 1]
    tail = _TRAILING_WHITESPACE.sub(newline, before[index + 1 :], count=1)
    return f"{head},{tail}{block}"
