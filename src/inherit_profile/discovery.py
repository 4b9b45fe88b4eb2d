"""Profile discovery from the editor's global storage file."""

import logging
from pathlib import Path
from typing import Any

from .exceptions import ProfileNotFoundError
from .jsonc import read_config_tree
from .schema import ProfileIdentity

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "Default"
PROFILES_SUBMENU_ID = "submenuitem.Profiles"


def find_by_key_value(node: Any, key: str, value: Any) -> dict[str, Any] | None:
    """
    Depth-first search for the first object whose ``key`` equals ``value``.

    Objects and lists already visited are skipped, so shared references
    cannot cause endless recursion.

    Example:
        >>> find_by_key_value({"a": [{"id": "x", "n": 1}]}, "id", "x")
        {'id': 'x', 'n': 1}
    """
    seen: set[int] = set()

    def search(current: Any) -> dict[str, Any] | None:
        if not isinstance(current, (dict, list)) or id(current) in seen:
            return None
        seen.add(id(current))

        if isinstance(current, dict):
            if key in current and current[key] == value:
                return current
            children = list(current.values())
        else:
            children = current

        for child in children:
            found = search(child)
            if found is not None:
                return found
        return None

    return search(node)


class StorageProfileRegistry:
    """Discovers profiles from an editor user directory.

    Layout::

        <user_dir>/                      Default profile
        <user_dir>/globalStorage/storage.json
        <user_dir>/profiles/<location>/  custom profiles
    """

    def __init__(self, user_dir: Path, current_profile: str | None = None):
        """
        Initialize profile registry.

        Args:
            user_dir: Editor user directory (contains globalStorage/)
            current_profile: Optional name overriding the profile marked current in storage
        """
        self.user_dir = user_dir
        self.current_profile = current_profile

    @property
    def storage_path(self) -> Path:
        return self.user_dir / "globalStorage" / "storage.json"

    def _read_storage(self) -> Any:
        result = read_config_tree(self.storage_path)
        if isinstance(result.error, FileNotFoundError):
            logger.debug("No global storage at %s", self.storage_path)
        elif not result.ok:
            logger.error("Failed to read global storage at %s: %s", self.storage_path, result.error)
        return result.tree

    def custom_profiles(self) -> list[dict[str, Any]]:
        """Return the ``userDataProfiles`` entries of the global storage file."""
        storage = self._read_storage()
        if isinstance(storage, dict):
            profiles = storage.get("userDataProfiles") or []
            return [profile for profile in profiles if isinstance(profile, dict)]
        return []

    def profile_map(self) -> dict[str, Path]:
        """
        Map every profile name to its directory.

        The Default profile always exists and lives in the user directory itself.
        """
        profiles = {DEFAULT_PROFILE: self.user_dir}
        for profile in self.custom_profiles():
            name = profile.get("name")
            location = profile.get("location")
            if name and location:
                profiles[name] = self.user_dir / "profiles" / location
        return profiles

    def current_profile_name(self) -> str:
        """
        Determine the current profile.

        The editor records the active profile as the checked item of the
        profiles submenu; its id ends with the profile location.

        Returns:
            Profile name, or "Default" when nothing is marked as current
        """
        if self.current_profile:
            return self.current_profile

        storage = self._read_storage()
        submenu = find_by_key_value(storage, "id", PROFILES_SUBMENU_ID)
        if submenu is None:
            return DEFAULT_PROFILE

        items = (submenu.get("submenu") or {}).get("items") or []
        for item in items:
            if not isinstance(item, dict) or not item.get("checked"):
                continue
            location = str(item.get("id", "")).rsplit(".", 1)[-1]
            profile = find_by_key_value(storage, "location", location)
            if profile is not None and profile.get("name"):
                return profile["name"]

        return DEFAULT_PROFILE


def get_profile(profile_map: dict[str, Path], name: str) -> ProfileIdentity:
    """
    Look up a profile by name.

    Raises:
        ProfileNotFoundError: If the name is not in the registry
    """
    path = profile_map.get(name)
    if path is None:
        raise ProfileNotFoundError(f"Profile '{name}' not found", {"profile": name})
    return ProfileIdentity(name=name, path=path)
