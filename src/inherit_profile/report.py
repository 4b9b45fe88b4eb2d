"""Per-sync report of what was inherited.

A ``ReportState`` is created at the start of a sync, passed down to every
step, and returned to the caller, so concurrent syncs of different profiles
never share state.
"""

from datetime import datetime

from pydantic import BaseModel
from pydantic import Field


class ExtensionsReport(BaseModel):
    added: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)


class SettingsReport(BaseModel):
    inherited: int = 0
    sources: dict[str, int] = Field(default_factory=dict, description="Inherited settings count per parent")


class ReportState(BaseModel):
    """Everything a single sync inherited, for human-readable summaries."""

    profile_name: str = "Unknown"
    parents: list[str] = Field(default_factory=list)
    extensions: ExtensionsReport = Field(default_factory=ExtensionsReport)
    settings: SettingsReport = Field(default_factory=SettingsReport)
    keybindings: int = 0
    tasks: int = 0
    snippets: list[str] = Field(default_factory=list)
    mcp_servers: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=datetime.now)

    def track_extension(self, extension_id: str, added: bool) -> None:
        if added:
            self.extensions.added.append(extension_id)
        else:
            self.extensions.failed.append(extension_id)

    def track_settings(self, by_parent: dict[str, dict]) -> None:
        """Record inherited settings counts from attribution buckets of the parents."""
        self.settings.sources = {name: len(by_parent.get(name, {})) for name in self.parents}
        self.settings.inherited = sum(self.settings.sources.values())

    def track_error(self, section: str, message: str) -> None:
        self.errors.append(f"{section}: {message}")


def render_markdown(report: ReportState) -> str:
    """
    Render a report as a markdown summary.

    Args:
        report: Completed sync report

    Returns:
        Markdown document
    """
    parents = ", ".join(f"`{name}`" for name in report.parents) or "None"
    lines = [
        "# Profile Sync Summary",
        "",
        f"**Profile:** `{report.profile_name}` | **Time:** {report.timestamp:%H:%M:%S}",
        "",
        f"**Parents:** {parents}",
        "",
        "---",
        "",
        "## Extensions",
        "",
    ]

    if not report.extensions.added and not report.extensions.failed:
        lines += ["_No changes._", ""]
    if report.extensions.added:
        lines += [f"### Installed ({len(report.extensions.added)})", "", "| Extension | Status |", "| :--- | :--- |"]
        lines += [f"| {extension_id} | Installed |" for extension_id in report.extensions.added]
        lines.append("")
    if report.extensions.failed:
        lines += [f"### Failed ({len(report.extensions.failed)})", ""]
        lines += [f"- {extension_id}" for extension_id in report.extensions.failed]
        lines.append("")

    lines += ["## Settings", "", f"**Inherited:** {report.settings.inherited} settings", ""]
    sources = [f"{name} ({count})" for name, count in report.settings.sources.items() if count]
    if sources:
        lines += [f"_Sources: {', '.join(sources)}_", ""]

    lines += ["## Keybindings", "", f"**Inherited:** {report.keybindings} keybindings", ""]
    lines += ["## Tasks", "", f"**Inherited:** {report.tasks} tasks", ""]

    lines += ["## MCP Servers", ""]
    lines += _status_table("Server", report.mcp_servers, "_No MCP servers synced._")

    lines += ["## Snippets", ""]
    lines += _status_table("File", report.snippets, "_No snippets synced._")

    if report.errors:
        lines += ["## Errors", ""]
        lines += [f"- {error}" for error in report.errors]
        lines.append("")

    lines += ["---", "*Generated by inherit-profile*"]
    return "\n".join(lines) + "\n"


def _status_table(column: str, items: list[str], empty: str) -> list[str]:
    if not items:
        return [empty, ""]
    rows = [f"| {column} | Status |", "| :--- | :--- |"]
    rows += [f"| `{item}` | Synced |" for item in items]
    return rows + [""]
