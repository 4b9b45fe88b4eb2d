"""Reading and writing JSON-with-comments files.

Parsing is delegated to ``json5``, which accepts the comments and trailing
commas editors allow in their settings files. Raw text helpers never touch
the content so the region manager can edit it surgically.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any
from typing import NamedTuple

import json5

from .exceptions import DocumentReadError
from .exceptions import DocumentWriteError
from .exceptions import JsoncParseError
from .scanner import last_meaningful_index

logger = logging.getLogger(__name__)


class ConfigReadResult(NamedTuple):
    """Outcome of reading a config file: parsed value plus optional error."""

    tree: Any
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_jsonc(text: str) -> Any:
    """
    Parse JSON-with-comments text.

    Args:
        text: Document text

    Returns:
        Parsed value; whitespace or comment-only text parses to an empty dict

    Raises:
        JsoncParseError: If the document is not valid JSON with comments

    Example:
        >>> parse_jsonc('{"a": 1, // note\\n}')
        {'a': 1}
    """
    if last_meaningful_index(text) is None:
        return {}
    try:
        return json5.loads(text)
    except ValueError as e:
        raise JsoncParseError(f"Invalid JSON-with-comments: {e}") from e


def read_config_tree(path: Path) -> ConfigReadResult:
    """
    Read and parse a JSON-with-comments file without raising.

    Args:
        path: File to read

    Returns:
        ConfigReadResult with the parsed value, or an empty dict and the error
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return ConfigReadResult({}, e)

    try:
        return ConfigReadResult(parse_jsonc(text))
    except JsoncParseError as e:
        e.context["path"] = str(path)
        return ConfigReadResult({}, e)


def read_current_tree(path: Path, default: Any) -> Any:
    """
    Read a document that is about to be rewritten.

    A missing file yields ``default``. Any other failure is fatal, since
    rewriting a document we could not understand would lose its content.

    Raises:
        DocumentReadError: If the file exists but cannot be read or parsed
    """
    result = read_config_tree(path)
    if isinstance(result.error, FileNotFoundError):
        return default
    if not result.ok:
        raise DocumentReadError(f"Failed to read {path}: {result.error}", {"path": str(path)}) from result.error
    return result.tree


def read_raw_text(path: Path) -> str:
    """Read a file verbatim. Failure is fatal since there is nothing to edit."""
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except OSError as e:
        raise DocumentReadError(f"Failed to read {path}: {e}", {"path": str(path)}) from e


def write_raw_text(path: Path, text: str) -> None:
    """
    Overwrite a file verbatim.

    Content goes to a sibling temporary file first and is moved into place
    with ``os.replace``, so readers see either the old or the new content.

    Raises:
        DocumentWriteError: If the file cannot be written
    """
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False, newline=""
        ) as handle:
            tmp_name = handle.name
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise DocumentWriteError(f"Failed to write {path}: {e}", {"path": str(path)}) from e
    logger.debug("Wrote %d characters to %s", len(text), path)


def write_json(path: Path, payload: Any) -> None:
    """Write ``payload`` as four-space indented JSON."""
    write_raw_text(path, json.dumps(payload, indent=4, ensure_ascii=False))
