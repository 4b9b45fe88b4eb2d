"""Tests for sync reports and markdown summaries."""

from inherit_profile.report import ReportState
from inherit_profile.report import render_markdown


def test_track_settings_counts_parent_buckets_only():
    report = ReportState(profile_name="Child", parents=["Base", "Team"])

    report.track_settings({"Base": {"a": 1}, "Team": {"b": 1, "c": 1}, "Child": {"own": 1}})

    assert report.settings.sources == {"Base": 1, "Team": 2}
    assert report.settings.inherited == 3


def test_track_extension_and_error():
    report = ReportState()

    report.track_extension("pub.one", added=True)
    report.track_extension("pub.two", added=False)
    report.track_error("Tasks", "disk full")

    assert report.extensions.added == ["pub.one"]
    assert report.extensions.failed == ["pub.two"]
    assert report.errors == ["Tasks: disk full"]


def test_reports_are_independent():
    first = ReportState()
    second = ReportState()

    first.snippets.append("python.json")

    assert second.snippets == []


class TestRenderMarkdown:
    """Test markdown summary rendering."""

    def test_full_report(self):
        report = ReportState(profile_name="Child", parents=["Base", "Team"], keybindings=2, tasks=1)
        report.track_extension("pub.one", added=True)
        report.track_extension("pub.bad", added=False)
        report.track_settings({"Base": {"a": 1}, "Team": {}})
        report.mcp_servers.append("docs")
        report.snippets.append("python.json")
        report.track_error("MCP", "broken")

        markdown = render_markdown(report)

        assert markdown.startswith("# Profile Sync Summary\n")
        assert "**Profile:** `Child`" in markdown
        assert "**Parents:** `Base`, `Team`" in markdown
        assert "| pub.one | Installed |" in markdown
        assert "### Failed (1)" in markdown
        assert "**Inherited:** 1 settings" in markdown
        assert "_Sources: Base (1)_" in markdown
        assert "**Inherited:** 2 keybindings" in markdown
        assert "**Inherited:** 1 tasks" in markdown
        assert "| `docs` | Synced |" in markdown
        assert "| `python.json` | Synced |" in markdown
        assert "- MCP: broken" in markdown
        assert markdown.endswith("*Generated by inherit-profile*\n")

    def test_empty_report(self):
        markdown = render_markdown(ReportState())

        assert "**Parents:** None" in markdown
        assert "_No changes._" in markdown
        assert "_No MCP servers synced._" in markdown
        assert "_No snippets synced._" in markdown
        assert "## Errors" not in markdown
