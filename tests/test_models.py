"""Tests for hunkindex.review.models module."""

import pytest
from pydantic import ValidationError

from hunkindex.review import (
    CoverageState,
    DiffLine,
    HunkCoverage,
    LineKind,
    ParseError,
    ReviewCoverage,
    ReviewGroup,
    create_hunk,
)


class TestLineKind:
    """Tests for LineKind enum."""

    def test_markers(self):
        """Test that each kind carries its diff marker."""
        assert LineKind.CONTEXT.marker == " "
        assert LineKind.ADD.marker == "+"
        assert LineKind.REMOVE.marker == "-"

    def test_old_and_new_counting(self):
        """Test which kinds count toward the old and new sides."""
        assert LineKind.CONTEXT.counts_old and LineKind.CONTEXT.counts_new
        assert LineKind.REMOVE.counts_old and not LineKind.REMOVE.counts_new
        assert LineKind.ADD.counts_new and not LineKind.ADD.counts_old


class TestDiffLine:
    """Tests for DiffLine class."""

    @pytest.mark.parametrize(
        "raw,kind,text",
        [
            (" context", LineKind.CONTEXT, "context"),
            ("+added", LineKind.ADD, "added"),
            ("-removed", LineKind.REMOVE, "removed"),
            ("+", LineKind.ADD, ""),
            ("--- a/not-a-header", LineKind.REMOVE, "-- a/not-a-header"),
        ],
    )
    def test_parse(self, raw, kind, text):
        """Test parsing marked lines."""
        line = DiffLine.parse(raw)

        assert line.kind is kind
        assert line.text == text
        assert line.raw == raw
        assert str(line) == raw

    def test_parse_invalid_prefix(self):
        """Test that an unknown prefix is a parse error."""
        with pytest.raises(ParseError, match="invalid diff line prefix"):
            DiffLine.parse("*oops")

    def test_parse_empty_line(self):
        """Test that an empty line is a parse error with its line number."""
        with pytest.raises(ParseError) as exc_info:
            DiffLine.parse("", line_number=7)

        assert exc_info.value.line_number == 7
        assert "line 7" in str(exc_info.value)

    def test_is_immutable(self):
        """Test that diff lines cannot be modified."""
        line = DiffLine.parse("+x")
        with pytest.raises(AttributeError):
            line.text = "y"


class TestHunk:
    """Tests for Hunk class."""

    def test_header(self):
        """Test the @@ header of a hunk."""
        hunk = create_hunk(1, "a.py", 0, 5, 5, [" a", "-b", "+c", " d"])

        assert hunk.header == "@@ -5,3 +5,3 @@"

    def test_snippet_short(self):
        """Test snippet for short hunk shows only changed lines."""
        hunk = create_hunk(1, "test.py", 0, 1, 1, [" context", "+added", "-removed"])

        snippet = hunk.snippet(10)
        assert "+added" in snippet
        assert "-removed" in snippet
        assert "context" not in snippet

    def test_snippet_truncated(self):
        """Test snippet truncation for long hunk."""
        hunk = create_hunk(1, "test.py", 0, 1, 1, [f"+line{i}" for i in range(20)])

        snippet = hunk.snippet(5)
        assert "+line4" in snippet
        assert "+line5" not in snippet
        assert "(15 more lines)" in snippet

    def test_raw_diff(self):
        """Test that raw_diff renders a standalone patch."""
        hunk = create_hunk(1, "a.py", 0, 3, 4, ["-x", "+y"])

        assert hunk.raw_diff == "--- a/a.py\n+++ b/a.py\n@@ -3,1 +4,1 @@\n-x\n+y\n"


class TestReviewGroup:
    """Tests for ReviewGroup model."""

    def test_accepts_camel_case_aliases(self):
        """Test loading the field names the reviewer writes."""
        group = ReviewGroup.model_validate(
            {"hunkId": 4, "lineRange": [1, 10], "markdownDescription": "## Title"}
        )

        assert group.hunk_id == 4
        assert group.line_range == (1, 10)
        assert group.markdown_description == "## Title"

    def test_accepts_field_names(self):
        """Test constructing with Python field names."""
        group = ReviewGroup(hunk_ids=[1, 2])

        assert group.hunk_ids == [1, 2]
        assert group.markdown_description == ""

    def test_requires_hunk_reference(self):
        """Test that a group without hunks is rejected."""
        with pytest.raises(ValidationError):
            ReviewGroup.model_validate({"markdownDescription": "orphan"})

    def test_assignments_for_hunk_ids(self):
        """Test that listed hunks are covered whole."""
        group = ReviewGroup(hunk_ids=[1, 2])

        assert group.assignments() == [(1, None), (2, None)]

    def test_assignments_convert_line_range(self):
        """Test that 1-based inclusive ranges become 0-based half-open."""
        group = ReviewGroup(hunk_id=3, line_range=(1, 3))

        assert group.assignments() == [(3, (0, 3))]

    def test_assignments_accept_stable_ids(self):
        """Test that string hunk keys pass through unchanged."""
        group = ReviewGroup(hunk_ids=["a.py:@-1,3+1,3"])

        assert group.assignments() == [("a.py:@-1,3+1,3", None)]


class TestCoverageState:
    """Tests for HunkCoverage and ReviewCoverage state reporting."""

    def test_hunk_coverage_states(self):
        """Test the three coverage states."""
        coverage = HunkCoverage(hunk_id=1, total_lines=4)
        assert coverage.state is CoverageState.UNSEEN

        coverage.covered_ranges = [(0, 2)]
        assert coverage.state is CoverageState.PARTIALLY_COVERED
        assert coverage.covered_count == 2

        coverage.covered_ranges = [(0, 4)]
        assert coverage.state is CoverageState.FULLY_COVERED

    def test_review_coverage_counters(self):
        """Test the summary counters over all hunks."""
        coverage = ReviewCoverage(
            hunks={
                1: HunkCoverage(1, 3, [(0, 3)]),
                2: HunkCoverage(2, 3, [(1, 2)]),
                3: HunkCoverage(3, 3),
            }
        )

        assert coverage.total_hunks == 3
        assert coverage.fully_explained_hunks == 1
        assert coverage.partially_explained_hunks == 1
        assert coverage.unexplained_hunks == 1
