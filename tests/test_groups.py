"""Tests for hunkindex.review.groups module."""

from hunkindex.review import parse_review_yaml, read_review_yaml
from hunkindex.review.groups import dedent_description


class TestParseReviewYaml:
    """Tests for parse_review_yaml function."""

    def test_parses_both_group_formats(self):
        """Test hunkIds groups and hunkId/lineRange groups."""
        content = """hunks:
  - hunkIds: [1, 2]
    markdownDescription: |
      ## Title
      Body
  - hunkId: 4
    lineRange: [1, 10]
    markdownDescription: First part
"""
        document, warnings = parse_review_yaml(content)

        assert warnings == []
        assert len(document.hunks) == 2
        assert document.hunks[0].hunk_ids == [1, 2]
        assert document.hunks[0].markdown_description == "## Title\nBody"
        assert document.hunks[1].hunk_id == 4
        assert document.hunks[1].line_range == (1, 10)

    def test_bare_list(self):
        """Test a document that is only the list of groups."""
        document, _ = parse_review_yaml("- hunkIds: [3]\n")

        assert document.hunks[0].hunk_ids == [3]

    def test_strips_code_fences(self):
        """Test YAML wrapped in markdown fences."""
        content = "```yaml\nhunks:\n  - hunkIds: [1]\n```\n"

        document, _ = parse_review_yaml(content)

        assert document.hunks[0].hunk_ids == [1]

    def test_skips_invalid_groups(self):
        """Test that bad groups are reported and the rest kept."""
        content = """hunks:
  - markdownDescription: no hunk reference
  - hunkId: 2
    lineRange: [1]
  - just a string
  - hunkIds: [5]
"""
        document, warnings = parse_review_yaml(content)

        assert [g.hunk_ids for g in document.hunks] == [[5]]
        assert len(warnings) == 3
        assert "Review group 1 is invalid" in warnings[0]
        assert "Review group 3 is not a mapping" in warnings[2]

    def test_header_only_is_empty_document(self):
        """Test the first progressive write of the reviewer."""
        document, warnings = parse_review_yaml("hunks:\n")

        assert document is not None
        assert document.hunks == []

    def test_empty_content_is_not_ready(self):
        """Test that empty content returns None."""
        assert parse_review_yaml("  \n") == (None, [])

    def test_broken_yaml_is_not_ready(self):
        """Test that a half-written file returns None instead of raising."""
        document, _ = parse_review_yaml("hunks:\n  - hunkIds: [1, 2\n")

        assert document is None

    def test_scalar_is_not_ready(self):
        """Test that a non-collection document returns None."""
        document, _ = parse_review_yaml("just text")

        assert document is None


class TestDedentDescription:
    """Tests for dedent_description function."""

    def test_removes_common_indent(self):
        assert dedent_description("    ## A\n      b\n    c") == "## A\n  b\nc"

    def test_ignores_blank_lines(self):
        assert dedent_description("  a\n\n  b") == "a\n\nb"

    def test_no_indent(self):
        assert dedent_description(" \nx\n") == "x"


class TestReadReviewYaml:
    """Tests for read_review_yaml function."""

    def test_reads_file(self, tmp_path):
        """Test reading a review file."""
        review_file = tmp_path / "review.yaml"
        review_file.write_text("hunks:\n  - hunkIds: [1]\n")

        document, _ = read_review_yaml(review_file)

        assert document.hunks[0].hunk_ids == [1]

    def test_missing_file(self, tmp_path):
        """Test that a missing file is not ready yet."""
        assert read_review_yaml(tmp_path / "missing.yaml") == (None, [])
