"""Generated regions inside a profile's settings document.

Inherited settings are written into the child's ``settings.json`` as labelled
sections, one header comment per contributing ancestor::

    {
        // --- Child (current) --- //
        "editor.fontFamily": "Fira Code",
        // --- Base --- //
        "editor.fontSize": 20
    }

Every sync removes the previously generated sections and writes fresh ones,
so running it twice with the same inputs produces identical text. Older
documents delimited by start/end marker comments are still recognized and
converted away from; markers are never written.
"""

import json
import logging
import re
from typing import Any

from .editor import detect_indent_unit
from .editor import detect_newline
from .editor import insert_before_close
from .editor import remove_trailing_comma
from .editor import split_at_final_close
from .scanner import SpanKind
from .scanner import first_structural_index
from .scanner import iter_spans
from .scanner import last_meaningful_index
from .scanner import last_structural_index

logger = logging.getLogger(__name__)

LEGACY_START_MARKER = "// --- INHERITED SETTINGS MARKER START --- //"
LEGACY_END_MARKER = "// --- INHERITED SETTINGS MARKER END --- //"
LEGACY_WARNING_COMMENT = "// WARNING: Do not remove the inherited settings start and end markers."
LEGACY_WARNING_EXPLAIN = "//          The markers are used to identify inserted inherited settings."

CURRENT_SUFFIX = " (current)"

_HEADER_PATTERN = re.compile(r"^// --- (?P<name>.+?) --- //$")


def header_line(name: str, current: bool = False) -> str:
    """
    Return the header comment introducing a profile's section.

    Example:
        >>> header_line("Base")
        '// --- Base --- //'
        >>> header_line("Child", current=True)
        '// --- Child (current) --- //'
    """
    label = f"{name}{CURRENT_SUFFIX}" if current else name
    return f"// --- {label} --- //"


def parse_header(line: str) -> str | None:
    """Return the label of a header comment line, or None for any other line."""
    match = _HEADER_PATTERN.match(line.strip())
    if match is None:
        return None
    return match.group("name")


def remove_legacy_region(text: str) -> str:
    """
    Cut out a marker-delimited block written by older versions.

    Everything from the start marker through the end marker is removed. When
    only one marker is present, or they are out of order, the text is left
    unchanged and a warning is logged.
    """
    start = text.find(LEGACY_START_MARKER)
    end = text.find(LEGACY_END_MARKER)

    if start == -1 and end == -1:
        return text
    if start == -1 or end == -1 or end < start:
        logger.warning("Found an inherited settings marker without its counterpart; leaving markers in place")
        return text

    before = text[:start].rstrip()
    after = text[end + len(LEGACY_END_MARKER) :].rstrip()
    return before + after


def _line_headers(text: str) -> list[str | None]:
    """
    Return the header label of every ``\\n``-separated line, or None.

    Only a line comment that begins its line counts. Header-like text inside
    a block comment or a string is ignored.
    """
    comment_starts = {span.start for span in iter_spans(text) if span.kind is SpanKind.LINE_COMMENT}
    labels: list[str | None] = []
    offset = 0
    for line in text.split("\n"):
        start = offset + len(line) - len(line.lstrip())
        labels.append(parse_header(line) if start in comment_starts else None)
        offset += len(line) + 1
    return labels


def remove_generated_region(text: str, child_name: str, ancestor_names: list[str]) -> str:
    """
    Remove previously generated inherited settings from a document.

    Header sections belonging to one of ``ancestor_names`` are dropped up to
    the next header or the closing brace of the top-level object. The child's
    own header and headers naming unknown profiles are kept along with their
    content, since that content may be hand written. Text after the closing
    brace is never touched.

    When a section was dropped, the text before the brace is right-trimmed
    and any trailing comma left behind is cleaned up. A document whose last
    meaningful character is not ``}`` gets a closing brace.

    Args:
        text: Raw settings document
        child_name: Name of the profile that owns the document
        ancestor_names: Profiles whose generated sections should go

    Returns:
        Document without generated sections, ending with a single line break
    """
    text = remove_legacy_region(text)
    newline = detect_newline(text)

    close = last_structural_index(text, "}")
    normalize = close is None or close != last_meaningful_index(text)
    if normalize:
        before, after = text, "}"
    else:
        before, after = text[:close], text[close:]

    ancestors = set(ancestor_names) - {child_name}
    kept: list[str] = []
    skipping = False

    for line, label in zip(before.split("\n"), _line_headers(before)):
        if label is not None:
            skipping = label in ancestors
        if skipping:
            normalize = True
            continue
        kept.append(line)

    if normalize:
        before = remove_trailing_comma("\n".join(kept).rstrip()) + newline
    else:
        before = remove_trailing_comma(before)
    return before + after.rstrip() + newline


def ensure_current_header(text: str, child_name: str, indent: str, newline: str = "\n") -> str:
    """
    Make sure the child's own header sits right after the opening brace.

    The header is only inserted when no line of the document is already the
    child's header. A document without an opening brace gets one.
    """
    header = header_line(child_name, current=True)
    if f"{child_name}{CURRENT_SUFFIX}" in _line_headers(text):
        return text

    brace = first_structural_index(text, "{")
    if brace is None:
        logger.warning("Settings document has no opening brace; starting a new object")
        body = text.strip()
        if not body.endswith("}"):
            body = f"{body}{newline}}}" if body else "}"
        return f"{{{newline}{indent}{header}{newline}{body}{newline}"

    rest = text[brace + 1 :]
    if not rest.startswith(("\n", "\r\n")):
        # The header is a line comment, so whatever followed the brace moves to its own line
        rest = rest.lstrip(" \t")
        rest = newline + (rest if rest.startswith("}") else indent + rest)
    return f"{text[: brace + 1]}{newline}{indent}{header}{rest}"


def format_entry(key: str, value: Any) -> str:
    """
    Render one flat setting as a JSON member.

    Example:
        >>> format_entry("editor.rulers", [80, 120])
        '"editor.rulers": [80, 120]'
    """
    return f"{json.dumps(key, ensure_ascii=False)}: {json.dumps(value, ensure_ascii=False)}"


def build_inherited_block(groups: list[tuple[str, dict[str, Any]]], indent: str, newline: str = "\n") -> str:
    """
    Render attributed settings as header-labelled sections.

    Every entry ends with a comma except the last entry of the last group,
    and a blank line separates consecutive groups.
    """
    total = sum(len(settings) for _, settings in groups)
    lines: list[str] = []
    written = 0

    for index, (name, settings) in enumerate(groups):
        if index > 0:
            lines.append("")
        lines.append(f"{indent}{header_line(name)}")
        for key, value in settings.items():
            written += 1
            comma = "," if written < total else ""
            lines.append(f"{indent}{format_entry(key, value)}{comma}")

    return newline.join(lines) + newline


def write_generated_region(text: str, child_name: str, groups: list[tuple[str, dict[str, Any]]]) -> str:
    """
    Write attributed inherited settings into a document.

    The document is expected to be free of generated sections (see
    ``remove_generated_region``). The child's header is ensured first, so a
    labelled local section exists even when nothing is inherited. Non-empty
    groups are then inserted just before the final closing brace, using the
    document's indentation and line endings.

    Args:
        text: Settings document without generated sections
        child_name: Name of the profile that owns the document
        groups: (ancestor name, flat settings) in configured parent order

    Returns:
        Updated document text
    """
    indent = detect_indent_unit(text)
    newline = detect_newline(text)
    text = ensure_current_header(text, child_name, indent, newline)

    groups = [(name, settings) for name, settings in groups if settings]
    if not groups:
        return text

    before, after = split_at_final_close(text)
    block = build_inherited_block(groups, indent, newline)
    return insert_before_close(before, block, newline) + after
