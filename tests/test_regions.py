"""Tests for generated inherited-settings regions."""

import logging

from inherit_profile.jsonc import parse_jsonc
from inherit_profile.regions import LEGACY_END_MARKER
from inherit_profile.regions import LEGACY_START_MARKER
from inherit_profile.regions import build_inherited_block
from inherit_profile.regions import ensure_current_header
from inherit_profile.regions import header_line
from inherit_profile.regions import parse_header
from inherit_profile.regions import remove_generated_region
from inherit_profile.regions import remove_legacy_region
from inherit_profile.regions import write_generated_region


def sync_once(text, child, groups):
    names = [name for name, _ in groups]
    return write_generated_region(remove_generated_region(text, child, names), child, groups)


class TestHeaders:
    """Test header comment lines."""

    def test_header_round_trip(self):
        assert parse_header(header_line("Base")) == "Base"
        assert parse_header(header_line("Child", current=True)) == "Child (current)"

    def test_indented_header_is_recognized(self):
        assert parse_header("    // --- Team Settings --- //") == "Team Settings"

    def test_other_comments_are_not_headers(self):
        assert parse_header("// --- not a header") is None
        assert parse_header('"key": 1, // --- Base --- //') is None
        assert parse_header("") is None


class TestRemoveLegacyRegion:
    """Test removal of marker-delimited blocks."""

    def test_removes_block_between_markers(self):
        text = (
            '{\n    "own": 1,\n'
            f"    {LEGACY_START_MARKER}\n"
            '    "inherited": 2\n'
            f"    {LEGACY_END_MARKER}\n"
            "}\n"
        )

        assert remove_legacy_region(text) == '{\n    "own": 1,\n}'

    def test_text_without_markers_unchanged(self):
        assert remove_legacy_region('{"a": 1}') == '{"a": 1}'

    def test_unpaired_start_marker_left_unchanged(self, caplog):
        text = f'{{\n    {LEGACY_START_MARKER}\n    "a": 1\n}}\n'

        with caplog.at_level(logging.WARNING, logger="inherit_profile.regions"):
            assert remove_legacy_region(text) == text
        assert "without its counterpart" in caplog.text

    def test_reversed_markers_left_unchanged(self):
        text = f"{{\n{LEGACY_END_MARKER}\n{LEGACY_START_MARKER}\n}}"

        assert remove_legacy_region(text) == text


class TestRemoveGeneratedRegion:
    """Test removal of header-labelled sections."""

    def test_removes_ancestor_sections_only(self):
        text = (
            "{\n"
            "    // --- Child (current) --- //\n"
            '    "own": 1,\n'
            "\n"
            "    // --- Base --- //\n"
            '    "inherited": 2\n'
            "}\n"
        )

        assert remove_generated_region(text, "Child", ["Base"]) == (
            '{\n    // --- Child (current) --- //\n    "own": 1\n}\n'
        )

    def test_unknown_header_keeps_its_content(self):
        text = '{\n    // --- My Notes --- //\n    "own": 1\n}\n'

        assert remove_generated_region(text, "Child", ["Base"]) == text

    def test_child_named_as_ancestor_is_never_removed(self):
        text = '{\n    // --- Child --- //\n    "own": 1\n}\n'

        assert remove_generated_region(text, "Child", ["Child"]) == text

    def test_comment_after_closing_brace_kept(self):
        text = '{\n    "own": 1\n}\n// my trailing note\n'

        cleaned = remove_generated_region(text, "Child", ["Base"])

        assert cleaned == text
        assert parse_jsonc(cleaned) == {"own": 1}

    def test_last_section_stops_at_closing_brace(self):
        text = '{\n    "own": 1,\n    // --- Base --- //\n    "a": 1\n}\n/* footer } */\n'

        assert remove_generated_region(text, "Child", ["Base"]) == '{\n    "own": 1\n}\n/* footer } */\n'

    def test_header_inside_block_comment_is_not_a_section(self):
        text = '{\n    /*\n    // --- Base --- //\n    */\n    "own": 1\n}\n'

        cleaned = remove_generated_region(text, "Child", ["Base"])

        assert cleaned == text
        assert parse_jsonc(cleaned) == {"own": 1}

    def test_header_inside_string_is_not_a_section(self):
        text = '{\n    "note": "\n// --- Base --- //\n",\n    "own": 1\n}\n'

        assert remove_generated_region(text, "Child", ["Base"]) == text

    def test_appends_closing_brace_when_missing(self):
        assert remove_generated_region('{\n    "own": 1', "Child", []) == '{\n    "own": 1\n}\n'

    def test_legacy_document_is_converted(self):
        text = (
            "{\n"
            '    "own": 1,\n'
            f"    {LEGACY_START_MARKER}\n"
            '    "inherited": 2\n'
            f"    {LEGACY_END_MARKER}\n"
            "}\n"
        )

        cleaned = remove_generated_region(text, "Child", ["Base"])

        assert cleaned == '{\n    "own": 1\n}\n'
        assert parse_jsonc(cleaned) == {"own": 1}


class TestEnsureCurrentHeader:
    """Test insertion of the child's own header."""

    def test_inserted_after_opening_brace(self):
        result = ensure_current_header('{\n    "own": 1\n}\n', "Child", "    ")

        assert result == '{\n    // --- Child (current) --- //\n    "own": 1\n}\n'

    def test_present_header_not_duplicated(self):
        text = '{\n    // --- Child (current) --- //\n    "own": 1\n}\n'

        assert ensure_current_header(text, "Child", "    ") == text

    def test_empty_object_on_one_line(self):
        result = ensure_current_header("{}\n", "Child", "  ")

        assert result == "{\n  // --- Child (current) --- //\n}\n"
        assert parse_jsonc(result) == {}

    def test_content_on_brace_line_moves_down(self):
        result = ensure_current_header('{ "own": 1 }', "Child", "  ")

        assert result == '{\n  // --- Child (current) --- //\n  "own": 1 }'
        assert parse_jsonc(result) == {"own": 1}

    def test_brace_in_leading_comment_ignored(self):
        result = ensure_current_header('// {\n{\n  "own": 1\n}\n', "Child", "  ")

        assert result == '// {\n{\n  // --- Child (current) --- //\n  "own": 1\n}\n'

    def test_header_inside_block_comment_does_not_count(self):
        text = '{\n  /* // --- Child (current) --- // */\n  "own": 1\n}\n'

        result = ensure_current_header(text, "Child", "  ")

        assert result.startswith("{\n  // --- Child (current) --- //\n  /*")

    def test_missing_brace_starts_object(self):
        result = ensure_current_header("", "Child", "    ")

        assert result == "{\n    // --- Child (current) --- //\n}\n"


class TestBuildInheritedBlock:
    """Test rendering of attributed sections."""

    def test_commas_and_blank_line_between_groups(self):
        block = build_inherited_block([("A", {"a": 1, "b": "x"}), ("B", {"c": [1, 2]})], "  ")

        assert block == (
            "  // --- A --- //\n"
            '  "a": 1,\n'
            '  "b": "x",\n'
            "\n"
            "  // --- B --- //\n"
            '  "c": [1, 2]\n'
        )

    def test_non_ascii_written_verbatim(self):
        block = build_inherited_block([("A", {"editor.fontFamily": "Noto Sans 日本"})], "\t")

        assert block == '\t// --- A --- //\n\t"editor.fontFamily": "Noto Sans 日本"\n'


class TestWriteGeneratedRegion:
    """Test full region writes."""

    def test_writes_sections_before_closing_brace(self):
        text = '{\n    "editor.fontFamily": "Fira Code"\n}\n'
        result = write_generated_region(text, "Child", [("Parent", {"editor.fontSize": 20})])

        assert result == (
            "{\n"
            "    // --- Child (current) --- //\n"
            '    "editor.fontFamily": "Fira Code",\n'
            "    // --- Parent --- //\n"
            '    "editor.fontSize": 20\n'
            "}\n"
        )
        assert parse_jsonc(result) == {"editor.fontFamily": "Fira Code", "editor.fontSize": 20}

    def test_empty_groups_write_header_only(self):
        result = write_generated_region('{\n    "own": 1\n}\n', "Child", [("Parent", {})])

        assert result == '{\n    // --- Child (current) --- //\n    "own": 1\n}\n'

    def test_keeps_comments_and_indentation(self):
        text = '{\n\t// my font\n\t"own": 1 // trailing\n}\n'
        result = write_generated_region(text, "Child", [("Base", {"b": 2})])

        assert result == (
            "{\n"
            "\t// --- Child (current) --- //\n"
            "\t// my font\n"
            '\t"own": 1, // trailing\n'
            "\t// --- Base --- //\n"
            '\t"b": 2\n'
            "}\n"
        )

    def test_sync_twice_is_byte_identical(self):
        text = '{\n  // keep me\n  "own": true,\n}\n'
        groups = [("Base", {"a": 1, "b": {"x": None}}), ("Team", {"c": "z"})]

        first = sync_once(text, "Child", groups)
        second = sync_once(first, "Child", groups)

        assert second == first
        assert parse_jsonc(first) == {"own": True, "a": 1, "b": {"x": None}, "c": "z"}

    def test_changed_parents_replace_old_sections(self):
        first = sync_once('{\n    "own": 1\n}\n', "Child", [("Base", {"a": 1})])
        second = sync_once(first, "Child", [("Base", {"a": 2})])

        assert '"a": 1' not in second
        assert parse_jsonc(second) == {"own": 1, "a": 2}

    def test_remove_after_write_restores_labelled_document(self):
        original = '{\n    "own": 1\n}\n'
        written = sync_once(original, "Child", [("Base", {"a": 1})])

        assert remove_generated_region(written, "Child", ["Base"]) == (
            '{\n    // --- Child (current) --- //\n    "own": 1\n}\n'
        )

    def test_sync_twice_keeps_text_after_closing_brace(self):
        text = '{\n    "own": 1\n}\n// footer, closes the object }\n'
        groups = [("Base", {"a": 1})]

        first = sync_once(text, "Child", groups)
        second = sync_once(first, "Child", groups)

        assert first.endswith('    "a": 1\n}\n// footer, closes the object }\n')
        assert second == first
        assert parse_jsonc(first) == {"own": 1, "a": 1}

    def test_crlf_document_keeps_crlf(self):
        text = '{\r\n    "own": 1\r\n}\r\n'
        groups = [("Base", {"a": 1}), ("Team", {"b": 2})]

        first = sync_once(text, "Child", groups)
        second = sync_once(first, "Child", groups)

        assert "\n" not in first.replace("\r\n", "")
        assert second == first
        assert parse_jsonc(first) == {"own": 1, "a": 1, "b": 2}
