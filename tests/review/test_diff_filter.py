"""
Unit tests for DiffFilter.

Tests file splitting, extension filtering and line stripping on sample
``-U0`` diffs.
"""

import pytest

from commit_review.review.diff_filter import DiffFilter, filter_diff
from review_helpers import COMMENTED_DIFF, CSS_DIFF, JS_TWO_HUNKS


# =============================================================================
# UNIT TESTS: file splitting and extension filtering
# =============================================================================

class TestSectionSelection:
    """Tests for which sections are kept."""

    def test_keeps_only_allowed_extensions(self, multi_file_diff):
        """CSS is dropped when only JS/TS are enabled."""
        sections = filter_diff(multi_file_diff, [".js", ".ts"])

        assert [s.file_name for s in sections] == ["src/a.js", "src/c.ts"]

    def test_preserves_diff_order(self):
        """Sections come back in the order of the diff."""
        diff = COMMENTED_DIFF + JS_TWO_HUNKS
        sections = filter_diff(diff, [".js", ".ts"])

        assert [s.file_name for s in sections] == ["src/c.ts", "src/a.js"]

    def test_extension_match_is_case_insensitive(self):
        """Upper-case file extensions still match."""
        diff = JS_TWO_HUNKS.replace("src/a.js", "src/A.JS")
        sections = filter_diff(diff, [".js"])

        assert len(sections) == 1
        assert sections[0].file_name == "src/A.JS"

    def test_text_before_first_header_is_dropped(self):
        """Preamble without a file header never becomes a section."""
        diff = "some preamble\n+not a file\n" + JS_TWO_HUNKS
        sections = filter_diff(diff, [".js"])

        assert len(sections) == 1
        assert "preamble" not in sections[0].content

    def test_no_matching_files(self):
        """Nothing enabled means nothing kept."""
        assert filter_diff(CSS_DIFF, [".js"]) == []

    def test_empty_diff(self):
        """Empty diff yields no sections."""
        assert filter_diff("", [".js"]) == []

    def test_duplicate_files_not_merged(self):
        """The same file twice gives two sections."""
        sections = filter_diff(JS_TWO_HUNKS + JS_TWO_HUNKS, [".js"])
        assert len(sections) == 2

    @pytest.mark.parametrize("path,expected", [
        ("src/a.js", ".js"),
        ("src/a.test.TS", ".ts"),
        ("Makefile", ""),
        (".env", ""),
        ("dir.v2/file", ""),
    ])
    def test_extension(self, path, expected):
        """Extension follows os.path.splitext rules."""
        assert DiffFilter.extension(path) == expected


# =============================================================================
# UNIT TESTS: line stripping
# =============================================================================

class TestLineStripping:
    """Tests for removal of deleted and comment lines."""

    def test_removed_lines_are_stripped(self, js_two_hunks):
        """Lines starting with '-' never survive, including the --- header."""
        content = filter_diff(js_two_hunks, [".js"])[0].content

        assert "el.textContent" not in content
        assert "--- a/src/a.js" not in content
        assert all(not line.startswith("-") for line in content.split("\n"))

    def test_added_lines_are_kept(self, js_two_hunks):
        """Added lines and hunk headers remain."""
        content = filter_diff(js_two_hunks, [".js"])[0].content

        assert "+  el.innerHTML = user.name;" in content
        assert "@@ -3,0 +4,2 @@ function init() {" in content
        assert content.startswith("diff --git a/src/a.js b/src/a.js")

    def test_comment_lines_are_stripped(self):
        """Lines whose trimmed text starts with '//' are dropped, code is kept."""
        content = filter_diff(COMMENTED_DIFF, [".ts"])[0].content

        assert "indented note" not in content
        assert "export const total" in content

    def test_added_comment_behind_marker_is_kept(self):
        """The heuristic looks at the raw line, so '+//' is not a comment."""
        content = filter_diff(COMMENTED_DIFF, [".ts"])[0].content

        assert "+// helper for totals" in content
        assert "export const total" in content

    def test_bare_comment_line_is_stripped(self):
        """A line that is itself a '//' comment is dropped."""
        assert DiffFilter.strip_lines("a\n   // note\nb") == "a\nb"

    def test_url_in_code_is_kept(self):
        """'//' inside code does not make a line a comment."""
        line = '+const url = "https://example.com";'
        assert DiffFilter.strip_lines(line) == line

    def test_filtering_is_deterministic(self, multi_file_diff):
        """Same input, same output."""
        first = filter_diff(multi_file_diff, [".js", ".ts"])
        second = filter_diff(multi_file_diff, [".js", ".ts"])
        assert first == second

    def test_section_length_matches_content(self, js_two_hunks):
        """DiffSection.length is the content length."""
        section = filter_diff(js_two_hunks, [".js"])[0]
        assert section.length == len(section.content)
