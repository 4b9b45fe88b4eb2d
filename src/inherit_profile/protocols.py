"""Protocols for the external collaborators of the sync engine."""

from pathlib import Path
from typing import Protocol


class ProfileRegistryProtocol(Protocol):
    """Protocol for discovering profiles and the current profile.

    This keeps the sync engine independent of where the editor stores its
    profile list.

    Example implementations:
        - StorageProfileRegistry reading the editor's storage.json
        - Static mapping for testing
    """

    def profile_map(self) -> dict[str, Path]:
        """Return a mapping from profile name to profile directory.

        Example result:
            {"Default": Path("~/.config/Code/User"), "Python": Path(".../profiles/-2a1f")}
        """
        ...

    def current_profile_name(self) -> str:
        """Return the name of the profile currently in use."""
        ...


class ExtensionHostProtocol(Protocol):
    """Protocol for the editor host that owns extension installation.

    Example implementations:
        - CodeCommandHost driving the editor's command line
        - Recording fake for testing
    """

    def installed_extensions(self) -> set[str]:
        """Return lower-cased ids of extensions installed in the current profile."""
        ...

    def install_extension(self, extension_id: str) -> None:
        """Install an extension into the current profile.

        Raises:
            ExtensionInstallError: If installation fails
        """
        ...

    def global_extensions_dir(self) -> Path | None:
        """Return the directory holding the Default profile's extensions, if known."""
        ...
