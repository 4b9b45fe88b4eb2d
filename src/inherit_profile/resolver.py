"""Hierarchical attribution of inherited settings.

Given the child's own flattened settings and its ordered parents, decide which
keys the child inherits and which single ancestor each key comes from.

Precedence rules:
- The child always wins: its own keys are never inherited
- Later parents in the configured list win over earlier ones
- A key is attributed to exactly one ancestor
"""

import logging
from pathlib import Path

from .jsonc import read_config_tree
from .merger import FlatMap
from .merger import flatten_settings
from .merger import merge_flat_maps
from .merger import sort_flat_map
from .merger import subtract_flat_map
from .schema import SETTINGS_FILE
from .schema import Attribution

logger = logging.getLogger(__name__)


def load_profile_settings(profile_map: dict[str, Path], name: str) -> FlatMap:
    """
    Load and flatten the settings of one profile.

    Missing profiles and unreadable files contribute nothing rather than
    failing, so one broken ancestor never blocks the others.

    Args:
        profile_map: Profile name to directory mapping
        name: Profile to load

    Returns:
        Flattened settings, empty when unavailable
    """
    profile_dir = profile_map.get(name)
    if profile_dir is None:
        logger.warning("Failed to collect settings for profile '%s': profile does not exist", name)
        return {}

    settings_path = profile_dir / SETTINGS_FILE
    result = read_config_tree(settings_path)
    if not result.ok:
        logger.debug("Ignoring settings of profile '%s' at %s: %s", name, settings_path, result.error)
        return {}
    if not isinstance(result.tree, dict):
        logger.warning("Settings of profile '%s' at %s are not an object", name, settings_path)
        return {}

    flat = flatten_settings(result.tree)
    logger.info("Found %d settings in '%s'", len(flat), settings_path)
    return flat


def collect_ancestor_settings(profile_map: dict[str, Path], parents: list[str]) -> list[tuple[str, FlatMap]]:
    """
    Load every parent profile's flattened settings.

    Returns:
        (name, settings) pairs in the configured parent order
    """
    logger.info("Collecting settings from %d parent profiles", len(parents))
    return [(name, load_profile_settings(profile_map, name)) for name in parents]


def resolve_attribution(child_name: str, child_settings: FlatMap, ancestors: list[tuple[str, FlatMap]]) -> Attribution:
    """
    Attribute inherited settings to the nearest ancestor defining them.

    Ancestors are visited from the most specific (last configured) to the
    most generic, and each one only claims keys nobody closer has claimed.

    Args:
        child_name: Name of the profile receiving settings
        child_settings: The child's own flattened settings
        ancestors: (name, flattened settings) in configured order, base first

    Returns:
        Attribution with one bucket per ancestor (plus the child's own bucket)
        and the merged inherited settings

    Example:
        >>> result = resolve_attribution("C", {"a": 0}, [("A", {"a": 1, "b": 1}), ("B", {"b": 2, "c": 2})])
        >>> result.by_parent["A"], result.by_parent["B"]
        ({}, {'b': 2, 'c': 2})
        >>> result.merged
        {'b': 2, 'c': 2}
    """
    claimed: FlatMap = dict(child_settings)
    merged: FlatMap = {}
    by_parent: dict[str, FlatMap] = {}

    for name, settings in reversed(ancestors):
        contributed = subtract_flat_map(settings, claimed)
        by_parent[name] = merge_flat_maps(by_parent.get(name, {}), contributed)
        merged = merge_flat_maps(merged, contributed)
        claimed = merge_flat_maps(claimed, contributed)

    by_parent = {name: sort_flat_map(bucket) for name, bucket in by_parent.items()}
    by_parent[child_name] = sort_flat_map(child_settings)
    return Attribution(by_parent=by_parent, merged=sort_flat_map(merged))
