"""Shared fixtures: a throwaway editor user directory with profiles."""

import json
from pathlib import Path

import pytest

from inherit_profile.discovery import StorageProfileRegistry


class UserDirBuilder:
    """Builds ``<user_dir>/globalStorage/storage.json`` and profile folders."""

    def __init__(self, root: Path):
        self.root = root
        self.profiles: dict[str, str] = {}
        self.current: str | None = None

    def add_profile(self, name: str, settings: str | None = None) -> Path:
        if name == "Default":
            profile_dir = self.root
        else:
            location = f"-{len(self.profiles) + 1:x}a{len(self.profiles) + 1}"
            self.profiles[name] = location
            profile_dir = self.root / "profiles" / location
        profile_dir.mkdir(parents=True, exist_ok=True)
        if settings is not None:
            (profile_dir / "settings.json").write_text(settings, encoding="utf-8")
        self._write_storage()
        return profile_dir

    def set_current(self, name: str) -> None:
        self.current = name
        self._write_storage()

    def registry(self) -> StorageProfileRegistry:
        return StorageProfileRegistry(self.root)

    def _write_storage(self) -> None:
        items = [
            {"id": f"workbench.profiles.actions.profileEntry.{location}", "checked": name == self.current}
            for name, location in self.profiles.items()
        ]
        storage = {
            "userDataProfiles": [{"name": name, "location": location} for name, location in self.profiles.items()],
            "lastKnownMenubarData": {
                "menus": {"File": {"items": [{"id": "submenuitem.Profiles", "submenu": {"items": items}}]}}
            },
        }
        storage_path = self.root / "globalStorage" / "storage.json"
        storage_path.parent.mkdir(parents=True, exist_ok=True)
        storage_path.write_text(json.dumps(storage, indent=2), encoding="utf-8")


@pytest.fixture
def user_dir(tmp_path):
    return UserDirBuilder(tmp_path / "User")
