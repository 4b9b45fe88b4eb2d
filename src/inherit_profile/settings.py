"""Settings inheritance for the current profile.

One sync reads the child's ``settings.json``, strips the sections generated
by the previous sync, works out which parent settings the child is missing,
and writes them back as labelled sections. The file is written once, at the
end, and only when its content changed.
"""

import logging

from .discovery import get_profile
from .exceptions import JsoncParseError
from .jsonc import parse_jsonc
from .jsonc import read_raw_text
from .jsonc import write_raw_text
from .merger import flatten_settings
from .protocols import ProfileRegistryProtocol
from .regions import remove_generated_region
from .regions import write_generated_region
from .report import ReportState
from .resolver import collect_ancestor_settings
from .resolver import resolve_attribution
from .schema import Attribution
from .schema import InheritanceConfig
from .schema import ProfileIdentity

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "{\n}\n"


def effective_parents(child_name: str, parents: list[str]) -> list[str]:
    """
    Normalize the configured parent list.

    The child itself is dropped and a repeated parent keeps only its last
    (highest precedence) position.

    Example:
        >>> effective_parents("C", ["A", "B", "C", "A"])
        ['B', 'A']
    """
    if child_name in parents:
        logger.warning("Profile '%s' lists itself as a parent; ignoring", child_name)
    seen: set[str] = set()
    result: list[str] = []
    for name in reversed(parents):
        if name != child_name and name not in seen:
            seen.add(name)
            result.append(name)
    return list(reversed(result))


def _read_settings_document(profile: ProfileIdentity) -> str:
    if not profile.settings_path.exists():
        logger.info("No settings file for '%s' yet; starting from an empty document", profile.name)
        return EMPTY_DOCUMENT
    raw = read_raw_text(profile.settings_path)
    return raw if raw.strip() else EMPTY_DOCUMENT


def _generated_names(registry: ProfileRegistryProtocol, child_name: str, parents: list[str]) -> list[str]:
    """Profiles whose header sections in the child's document are generated."""
    return [name for name in dict.fromkeys([*parents, *registry.profile_map()]) if name != child_name]


def sync_settings(
    registry: ProfileRegistryProtocol,
    config: InheritanceConfig,
    report: ReportState | None = None,
) -> Attribution | None:
    """
    Apply inherited settings to the current profile.

    Args:
        registry: Profile registry
        config: Inheritance options (parents)
        report: Optional report to record results in

    Returns:
        The attribution written, or None when the document was left untouched

    Raises:
        DocumentReadError: If the child's settings cannot be read
        DocumentWriteError: If the child's settings cannot be written
    """
    profile_map = registry.profile_map()
    child_name = registry.current_profile_name()
    child = get_profile(profile_map, child_name)
    parents = effective_parents(child_name, config.parents)

    raw = _read_settings_document(child)
    cleaned = remove_generated_region(raw, child_name, _generated_names(registry, child_name, parents))

    try:
        tree = parse_jsonc(cleaned)
    except JsoncParseError as e:
        logger.warning("Cannot parse settings of '%s' at %s; not rewriting it: %s", child_name, child.settings_path, e)
        if report is not None:
            report.track_error("Settings", f"unreadable settings file {child.settings_path}")
        return None
    if not isinstance(tree, dict):
        logger.warning("Settings of '%s' at %s are not an object; not rewriting it", child_name, child.settings_path)
        return None

    child_settings = flatten_settings(tree)
    logger.info("Found %d settings in current profile '%s'", len(child_settings), child_name)

    attribution = resolve_attribution(child_name, child_settings, collect_ancestor_settings(profile_map, parents))
    logger.info("Found %d inherited settings for '%s'", len(attribution.merged), child_name)
    if report is not None:
        report.track_settings(attribution.by_parent)

    updated = write_generated_region(cleaned, child_name, attribution.groups(parents))
    if updated != raw:
        logger.info("Writing %d inherited settings into %s", len(attribution.merged), child.settings_path)
        write_raw_text(child.settings_path, updated)
    else:
        logger.info("Settings of '%s' already up to date", child_name)

    return attribution


def remove_inherited_settings(registry: ProfileRegistryProtocol) -> bool:
    """
    Strip every generated section from the current profile's settings.

    The child's own header is kept so the local section stays labelled.

    Returns:
        True if the file changed
    """
    profile_map = registry.profile_map()
    child_name = registry.current_profile_name()
    child = get_profile(profile_map, child_name)
    if not child.settings_path.exists():
        return False

    raw = read_raw_text(child.settings_path)
    cleaned = remove_generated_region(raw, child_name, [name for name in profile_map if name != child_name])
    if cleaned == raw:
        return False

    logger.info("Removing inherited settings from %s", child.settings_path)
    write_raw_text(child.settings_path, cleaned)
    return True
