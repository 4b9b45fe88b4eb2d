"""Settings flattening and merging utilities for inheritance.

This module turns nested settings trees into flat dotted-key maps and combines
those maps, so that inheritance can be computed key by key instead of through
recursive deep merges.

Key principles:
- Objects are flattened into dotted paths ("editor.fontSize")
- Lists are opaque leaves - never descended into
- Later maps override earlier ones - a plain right-biased union
- Ordering is for readability only - sorting never changes meaning
"""

from typing import TypeAlias

ConfigValue: TypeAlias = dict[str, "ConfigValue"] | list["ConfigValue"] | str | int | float | bool | None
FlatMap: TypeAlias = dict[str, ConfigValue]


def flatten_settings(tree: dict[str, ConfigValue], prefix: str = "") -> FlatMap:
    """
    Flatten a nested settings tree into a dotted-key map.

    Recursion only follows object nodes. Lists and scalars become leaves.
    An object reachable twice (shared or cyclic reference) is only flattened
    the first time it is met.

    Args:
        tree: Settings object (parsed JSON-with-comments)
        prefix: Dotted path of ``tree`` inside an enclosing tree

    Returns:
        Flat map from dotted path to leaf value

    Example:
        >>> flatten_settings({"a": {"b": 1, "c": {"d": 2}}, "e": [{"f": 3}]})
        {'a.b': 1, 'a.c.d': 2, 'e': [{'f': 3}]}
    """
    result: FlatMap = {}
    _flatten_into(tree, prefix, result, set())
    return result


def _flatten_into(node: dict[str, ConfigValue], prefix: str, result: FlatMap, visited: set[int]) -> None:
    if id(node) in visited:
        return
    visited.add(id(node))

    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else key
        match value:
            case dict():
                _flatten_into(value, path, result, visited)
            case _:
                # Lists and scalars are stored as-is
                result[path] = value


def merge_flat_maps(*flat_maps: FlatMap) -> FlatMap:
    """
    Merge flat maps left to right.

    Keys from later maps override keys from earlier maps.

    Example:
        >>> merge_flat_maps({"editor.fontSize": 14, "files.autoSave": "off"}, {"editor.fontSize": 16})
        {'editor.fontSize': 16, 'files.autoSave': 'off'}
    """
    merged: FlatMap = {}
    for flat_map in flat_maps:
        merged.update(flat_map)
    return merged


def sort_flat_map(flat_map: FlatMap) -> FlatMap:
    """
    Return a copy of ``flat_map`` with keys in ascending alphabetical order.

    Comparison ignores case first and falls back to the exact key, so the
    order is the same on every machine.

    Example:
        >>> list(sort_flat_map({"b": 1, "B": 2, "a": 3}))
        ['a', 'B', 'b']
    """
    return {key: flat_map[key] for key in sorted(flat_map, key=_sort_key)}


def _sort_key(key: str) -> tuple[str, str]:
    return key.casefold(), key


def subtract_flat_map(source: FlatMap, exclude: FlatMap) -> FlatMap:
    """
    Return the entries of ``source`` whose keys are absent from ``exclude``.

    Example:
        >>> subtract_flat_map({"a": 1, "b": 2}, {"b": 3})
        {'a': 1}
    """
    return {key: value for key, value in source.items() if key not in exclude}


INHERITED_FLAG = "__inherited"


def tag_inherited(items: list[dict[str, ConfigValue]]) -> list[dict[str, ConfigValue]]:
    """
    Return copies of ``items`` marked as inherited.

    Example:
        >>> tag_inherited([{"key": "ctrl+k"}])
        [{'key': 'ctrl+k', '__inherited': True}]
    """
    return [{**item, INHERITED_FLAG: True} for item in items]


def is_inherited(item: ConfigValue) -> bool:
    """Return True for an object previously written by ``tag_inherited``."""
    return isinstance(item, dict) and INHERITED_FLAG in item


def merge_tagged_lists(parent_lists: list[list[dict[str, ConfigValue]]], current: list[ConfigValue]) -> list[ConfigValue]:
    """
    Combine parent lists with the child's own entries.

    Parent entries come first, in configured order, tagged as inherited.
    Entries the child inherited earlier are replaced; its own entries are
    kept after the inherited ones.

    Example:
        >>> merge_tagged_lists([[{"a": 1}]], [{"a": 0, "__inherited": True}, {"b": 2}])
        [{'a': 1, '__inherited': True}, {'b': 2}]
    """
    inherited = tag_inherited([item for items in parent_lists for item in items if isinstance(item, dict)])
    own = [item for item in current if not is_inherited(item)]
    return [*inherited, *own]
