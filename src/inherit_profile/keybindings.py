"""Keybindings inheritance."""

import logging
from pathlib import Path

from .jsonc import read_config_tree
from .jsonc import read_current_tree
from .jsonc import write_json
from .merger import is_inherited
from .merger import merge_tagged_lists
from .report import ReportState
from .schema import ProfileIdentity

logger = logging.getLogger(__name__)

KEYBINDINGS_FILE = "keybindings.json"


def sync_keybindings(
    profile_map: dict[str, Path], child: ProfileIdentity, parents: list[str], report: ReportState
) -> int:
    """
    Copy parent keybindings into the current profile.

    Parent keybindings are concatenated in configured order and written
    ahead of the child's own keybindings, which are never modified.

    Returns:
        Number of inherited keybindings written

    Raises:
        DocumentReadError: If the child's keybindings exist but cannot be parsed
        DocumentWriteError: If the child's keybindings cannot be written
    """
    parent_lists = []
    for parent in parents:
        parent_dir = profile_map.get(parent)
        if parent_dir is None:
            logger.warning("Parent profile '%s' not found", parent)
            continue
        keybindings = read_config_tree(parent_dir / KEYBINDINGS_FILE).tree
        if isinstance(keybindings, list):
            logger.info("Loaded %d keybindings from parent '%s'", len(keybindings), parent)
            parent_lists.append(keybindings)

    current_path = child.file(KEYBINDINGS_FILE)
    current = read_current_tree(current_path, default=[])
    final = merge_tagged_lists(parent_lists, current if isinstance(current, list) else [])

    inherited = sum(1 for item in final if is_inherited(item))
    write_json(current_path, final)
    logger.info("Synced %d inherited keybindings", inherited)
    report.keybindings = inherited
    return inherited
