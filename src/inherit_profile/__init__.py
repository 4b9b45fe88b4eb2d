"""Inherit Profile - settings inheritance between editor profiles."""

from .discovery import StorageProfileRegistry
from .editor import detect_indent_unit
from .editor import insert_before_close
from .editor import remove_trailing_comma
from .editor import split_at_final_close
from .exceptions import DocumentReadError
from .exceptions import DocumentWriteError
from .exceptions import InheritProfileError
from .exceptions import ProfileNotFoundError
from .jsonc import parse_jsonc
from .jsonc import read_config_tree
from .merger import flatten_settings
from .merger import merge_flat_maps
from .merger import sort_flat_map
from .merger import subtract_flat_map
from .protocols import ExtensionHostProtocol
from .protocols import ProfileRegistryProtocol
from .regions import remove_generated_region
from .regions import write_generated_region
from .report import ReportState
from .report import render_markdown
from .resolver import resolve_attribution
from .scanner import iter_spans
from .scanner import last_meaningful_index
from .scanner import last_two_meaningful_indices
from .schema import Attribution
from .schema import InheritanceConfig
from .schema import ProfileIdentity
from .settings import remove_inherited_settings
from .settings import sync_settings
from .sync import update_profile_inheritance
from .watch import watch_profile_changes

__all__ = [
    # Sync entry points
    "update_profile_inheritance",
    "sync_settings",
    "remove_inherited_settings",
    "watch_profile_changes",
    "StorageProfileRegistry",
    # Inheritance engine
    "flatten_settings",
    "merge_flat_maps",
    "sort_flat_map",
    "subtract_flat_map",
    "resolve_attribution",
    # Document editing
    "iter_spans",
    "last_meaningful_index",
    "last_two_meaningful_indices",
    "remove_trailing_comma",
    "split_at_final_close",
    "detect_indent_unit",
    "insert_before_close",
    "remove_generated_region",
    "write_generated_region",
    "parse_jsonc",
    "read_config_tree",
    # Schemas
    "Attribution",
    "InheritanceConfig",
    "ProfileIdentity",
    "ReportState",
    "render_markdown",
    # Protocols
    "ProfileRegistryProtocol",
    "ExtensionHostProtocol",
    # Exceptions
    "InheritProfileError",
    "ProfileNotFoundError",
    "DocumentReadError",
    "DocumentWriteError",
]

__version__ = "0.1.0"
