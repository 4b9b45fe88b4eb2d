"""User tasks inheritance."""

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

TASKS_FILE = "tasks.json"
DEFAULT_TASKS_VERSION = "2.0.0"


def sync_tasks(profile_map: dict[str, Path], child: ProfileIdentity, parents: list[str], report: ReportState) -> int:
    """
    Copy parent tasks into the current profile's ``tasks.json``.

    Returns:
        Number of inherited tasks written
    """
    parent_lists = []
    for parent in parents:
        parent_dir = profile_map.get(parent)
        if parent_dir is None:
            continue
        tasks_file = read_config_tree(parent_dir / TASKS_FILE).tree
        tasks = tasks_file.get("tasks") if isinstance(tasks_file, dict) else None
        if isinstance(tasks, list):
            logger.info("Loaded %d tasks from parent '%s'", len(tasks), parent)
            parent_lists.append(tasks)

    current_path = child.file(TASKS_FILE)
    current = read_current_tree(current_path, default={})
    if not isinstance(current, dict):
        current = {}
    current_tasks = current.get("tasks")

    output = {
        "version": current.get("version") or DEFAULT_TASKS_VERSION,
        "tasks": merge_tagged_lists(parent_lists, current_tasks if isinstance(current_tasks, list) else []),
    }

    inherited = sum(1 for task in output["tasks"] if is_inherited(task))
    write_json(current_path, output)
    logger.info("Synced %d inherited tasks", inherited)
    report.tasks = inherited
    return inherited
