"""Full inheritance update for the current profile."""

import logging

from .discovery import get_profile
from .exceptions import InheritProfileError
from .exceptions import ProfileNotFoundError
from .extensions import sync_extensions
from .keybindings import sync_keybindings
from .mcp import sync_mcp
from .protocols import ExtensionHostProtocol
from .protocols import ProfileRegistryProtocol
from .report import ReportState
from .resolver import load_profile_settings
from .schema import InheritanceConfig
from .settings import effective_parents
from .settings import sync_settings
from .snippets import sync_snippets
from .tasks import sync_tasks

logger = logging.getLogger(__name__)


def load_inheritance_config(registry: ProfileRegistryProtocol) -> InheritanceConfig:
    """Read inheritance options from the current profile's settings."""
    name = registry.current_profile_name()
    return InheritanceConfig.from_settings(load_profile_settings(registry.profile_map(), name))


def update_profile_inheritance(
    registry: ProfileRegistryProtocol,
    config: InheritanceConfig | None = None,
    extension_host: ExtensionHostProtocol | None = None,
) -> ReportState:
    """
    Bring the current profile up to date with its parents.

    Runs extensions, settings, keybindings, tasks, snippets and MCP servers
    in that order. A failure in an auxiliary step is logged and recorded in
    the report without stopping the others; settings failures propagate.

    Args:
        registry: Profile registry
        config: Inheritance options; read from the current profile when omitted
        extension_host: Host used to install extensions; extensions are skipped without one

    Returns:
        Report describing everything inherited

    Raises:
        DocumentReadError: If the current profile's settings cannot be read
        DocumentWriteError: If the current profile's settings cannot be written
    """
    if config is None:
        config = load_inheritance_config(registry)

    child_name = registry.current_profile_name()
    parents = effective_parents(child_name, config.parents)
    report = ReportState(profile_name=child_name, parents=parents)

    if not parents:
        logger.info("No parent profiles configured; skipping inheritance update")
        return report

    profile_map = registry.profile_map()
    try:
        child = get_profile(profile_map, child_name)
    except ProfileNotFoundError as e:
        logger.error("Unable to find current profile directory for '%s'", child_name)
        report.track_error("Main", e.message)
        return report

    logger.info("Starting profile inheritance update for '%s'", child_name)

    if config.extensions and extension_host is not None:
        _run_step("Extensions", report, sync_extensions, profile_map, parents, extension_host, report)

    sync_settings(registry, config, report)

    if config.keybindings:
        _run_step("Keybindings", report, sync_keybindings, profile_map, child, parents, report)
    if config.tasks:
        _run_step("Tasks", report, sync_tasks, profile_map, child, parents, report)
    if config.snippets:
        _run_step("Snippets", report, sync_snippets, profile_map, child, parents, report)
    if config.mcp:
        _run_step("MCP", report, sync_mcp, profile_map, child, parents, report)

    logger.info("Profile inheritance update completed")
    return report


def _run_step(section: str, report: ReportState, step, *args) -> None:
    logger.info("--- %s Sync ---", section)
    try:
        step(*args)
    except (InheritProfileError, OSError) as e:
        logger.error("Failed to sync %s: %s", section.lower(), e)
        report.track_error(section, str(e))
