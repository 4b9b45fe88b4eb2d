"""Extension inheritance through the editor host."""

import logging
import re
import subprocess
from pathlib import Path

from .discovery import DEFAULT_PROFILE
from .exceptions import ExtensionInstallError
from .jsonc import read_config_tree
from .protocols import ExtensionHostProtocol
from .report import ReportState

logger = logging.getLogger(__name__)

EXTENSIONS_FILE = "extensions.json"

# publisher.name-1.2.3
_EXTENSION_DIR_PATTERN = re.compile(r"^(.+)-(\d+\.\d+\.\d+)$")


def scan_extensions_dir(extensions_dir: Path) -> list[str]:
    """
    List extension ids installed in a global extensions directory.

    Example layout: ``ms-python.python-2023.1.0/`` -> ``ms-python.python``
    """
    found = set()
    for entry in extensions_dir.iterdir():
        if not entry.is_dir() or entry.name.startswith("."):
            continue
        match = _EXTENSION_DIR_PATTERN.match(entry.name)
        if match:
            found.add(match.group(1).lower())
    return sorted(found)


def profile_extension_ids(profile_map: dict[str, Path], name: str, host: ExtensionHostProtocol) -> list[str]:
    """
    Return the extension ids installed in a profile.

    Custom profiles list their extensions in ``extensions.json``; the Default
    profile uses the global extensions directory instead.
    """
    profile_dir = profile_map.get(name)
    if profile_dir is None:
        logger.warning("Profile '%s' not found", name)
        return []

    if name == DEFAULT_PROFILE:
        extensions_dir = host.global_extensions_dir()
        if extensions_dir is None or not extensions_dir.is_dir():
            return []
        try:
            ids = scan_extensions_dir(extensions_dir)
        except OSError as e:
            logger.error("Failed to scan global extensions directory %s: %s", extensions_dir, e)
            return []
        logger.info("Found %d extensions in '%s' profile", len(ids), name)
        return ids

    entries = read_config_tree(profile_dir / EXTENSIONS_FILE).tree
    if not isinstance(entries, list):
        return []

    ids = []
    for entry in entries:
        identifier = entry.get("identifier") if isinstance(entry, dict) else None
        if isinstance(identifier, dict) and identifier.get("id"):
            ids.append(identifier["id"])
    logger.info("Found %d extensions in '%s' profile", len(ids), name)
    return ids


def sync_extensions(
    profile_map: dict[str, Path], parents: list[str], host: ExtensionHostProtocol, report: ReportState
) -> int:
    """
    Install parent extensions missing from the current profile.

    An installation failure is recorded and the remaining extensions are
    still attempted.

    Returns:
        Number of extensions installed
    """
    installed = {extension_id.lower() for extension_id in host.installed_extensions()}
    logger.info("Current profile has %d extensions installed", len(installed))

    total = 0
    for parent in parents:
        for extension_id in profile_extension_ids(profile_map, parent, host):
            if extension_id.lower() in installed:
                continue
            logger.info("Installing '%s' from '%s'", extension_id, parent)
            try:
                host.install_extension(extension_id)
            except ExtensionInstallError as e:
                logger.error("Failed to install '%s': %s", extension_id, e)
                report.track_extension(extension_id, added=False)
                continue
            installed.add(extension_id.lower())
            report.track_extension(extension_id, added=True)
            total += 1

    if total == 0:
        logger.info("All extensions already installed")
    else:
        logger.info("Installed %d extensions", total)
    return total


class CodeCommandHost:
    """Extension host backed by the editor's command line (``code``)."""

    def __init__(self, profile: str, executable: str = "code", extensions_dir: Path | None = None):
        """
        Initialize command line host.

        Args:
            profile: Profile to install into
            executable: Editor executable
            extensions_dir: Global extensions directory (for the Default profile)
        """
        self.profile = profile
        self.executable = executable
        self.extensions_dir = extensions_dir

    def _run(self, *args: str) -> str:
        command = [self.executable, *args, "--profile", self.profile]
        try:
            completed = subprocess.run(command, capture_output=True, text=True, check=True)
        except (OSError, subprocess.CalledProcessError) as e:
            raise ExtensionInstallError(f"Command failed: {' '.join(command)}: {e}", {"command": command}) from e
        return completed.stdout

    def installed_extensions(self) -> set[str]:
        return {line.strip().lower() for line in self._run("--list-extensions").splitlines() if line.strip()}

    def install_extension(self, extension_id: str) -> None:
        self._run("--install-extension", extension_id)

    def global_extensions_dir(self) -> Path | None:
        if self.extensions_dir is not None:
            return self.extensions_dir
        default = Path.home() / ".vscode" / "extensions"
        return default if default.is_dir() else None
