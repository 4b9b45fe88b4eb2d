"""Pydantic schemas for profile inheritance."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

SETTINGS_FILE = "settings.json"
CONFIG_SECTION = "inheritProfile"


class ProfileIdentity(BaseModel):
    """A named profile and the directory holding its files."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Profile name as shown by the editor")
    path: Path = Field(..., description="Profile root directory")

    @property
    def settings_path(self) -> Path:
        return self.path / SETTINGS_FILE

    def file(self, name: str) -> Path:
        """Return the path of a file inside the profile directory."""
        return self.path / name


class Attribution(BaseModel):
    """Which ancestor contributed which inherited settings."""

    model_config = ConfigDict(frozen=True)

    by_parent: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description=(
            "Flat settings per profile name: keys newly contributed by each ancestor, "
            "plus the child's own settings under the child's name"
        ),
    )
    merged: dict[str, Any] = Field(default_factory=dict, description="All inherited settings, sorted by key")

    def groups(self, parents: list[str]) -> list[tuple[str, dict[str, Any]]]:
        """
        Return non-empty ancestor buckets in configured parent order.

        Args:
            parents: Parent profile names, base first

        Returns:
            List of (profile name, flat settings) pairs
        """
        groups = []
        for name in parents:
            bucket = self.by_parent.get(name)
            if bucket:
                groups.append((name, bucket))
        return groups


class InheritanceConfig(BaseModel):
    """Inheritance options for the current profile."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    parents: list[str] = Field(default_factory=list, description="Parent profiles, later entries take precedence")
    extensions: bool = Field(True, description="Install extensions found in parent profiles")
    keybindings: bool = Field(True, description="Inherit keybindings")
    tasks: bool = Field(True, description="Inherit user tasks")
    snippets: bool = Field(True, description="Copy snippet files")
    mcp: bool = Field(True, description="Inherit MCP server definitions")
    show_summary: bool = Field(False, alias="showSummary", description="Write a markdown summary after syncing")

    @classmethod
    def from_settings(cls, flat_settings: dict[str, Any]) -> "InheritanceConfig":
        """
        Build options from the ``inheritProfile.*`` keys of flattened settings.

        Example:
            >>> InheritanceConfig.from_settings({"inheritProfile.parents": ["Base"]}).parents
            ['Base']
        """
        prefix = f"{CONFIG_SECTION}."
        data = {key[len(prefix) :]: value for key, value in flat_settings.items() if key.startswith(prefix)}
        known = {name for name in cls.model_fields} | {"showSummary"}
        return cls(**{key: value for key, value in data.items() if key in known})
