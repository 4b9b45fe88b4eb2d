"""Snippet file inheritance."""

import logging
import shutil
from pathlib import Path

from .report import ReportState
from .schema import ProfileIdentity

logger = logging.getLogger(__name__)

SNIPPETS_DIR = "snippets"
SNIPPET_SUFFIXES = (".json", ".code-snippets")


def sync_snippets(
    profile_map: dict[str, Path], child: ProfileIdentity, parents: list[str], report: ReportState
) -> list[str]:
    """
    Copy parent snippet files the current profile does not have yet.

    A snippet file with the same name in the current profile is the user's
    override and is never replaced.

    Returns:
        Names of the copied files
    """
    target_dir = child.file(SNIPPETS_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)
    copied = []

    for parent in parents:
        parent_dir = profile_map.get(parent)
        if parent_dir is None:
            continue
        source_dir = parent_dir / SNIPPETS_DIR
        if not source_dir.is_dir():
            continue

        for source in sorted(source_dir.iterdir()):
            if not source.is_file() or not source.name.endswith(SNIPPET_SUFFIXES):
                continue
            destination = target_dir / source.name
            if destination.exists():
                logger.info("Snippet '%s' exists in current profile; skipping inheritance", source.name)
                continue
            shutil.copyfile(source, destination)
            logger.info("Synced snippet file '%s' from '%s'", source.name, parent)
            report.snippets.append(source.name)
            copied.append(source.name)

    return copied
