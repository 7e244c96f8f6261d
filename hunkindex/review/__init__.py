"""Hunk addressing and review coverage for hunkindex.

This package provides modular hunk handling with:
- models: LineKind, DiffLine, Hunk, FileDiff, ParsedDiff, StableHunkRef,
          ReviewGroup, ReviewDocument, CoverageState, HunkCoverage,
          ReviewCoverage, UncoveredPortion
- exceptions: HunkError, ParseError, InvalidHunkId, RangeError,
              CombineConflict, UnknownHunkError, NoHunksError
- parser: parse_unified_diff, parse_hunks_with_ids, create_hunk_map
- addressing: hunk_to_stable_id, parse_hunk_id, find_hunk_by_stable_id
- patch: build_patch, create_hunk, calculate_line_offsets, create_sub_hunk,
         combine_hunk_patches
- coverage: initialize_coverage, mark_covered, mark_hunk_fully_covered,
            update_coverage_from_group, get_uncovered_portions,
            format_uncovered_message
- context: hunks_to_context_xml, format_hunk_listing
- groups: parse_review_yaml, read_review_yaml
"""

# Models
from hunkindex.review.models import (
    CoverageState,
    DiffLine,
    FileDiff,
    Hunk,
    HunkCoverage,
    HunkKey,
    LineKind,
    ParsedDiff,
    ReviewCoverage,
    ReviewDocument,
    ReviewGroup,
    StableHunkRef,
    UncoveredPortion,
)

# Exceptions
from hunkindex.review.exceptions import (
    CombineConflict,
    HunkError,
    InvalidHunkId,
    NoHunksError,
    ParseError,
    RangeError,
    UnknownHunkError,
)

# Parser
from hunkindex.review.parser import (
    create_hunk_map,
    parse_hunks_with_ids,
    parse_unified_diff,
)

# Stable addressing
from hunkindex.review.addressing import (
    find_hunk_by_stable_id,
    hunk_to_stable_id,
    parse_hunk_id,
)

# Patch builder
from hunkindex.review.patch import (
    LineOffsets,
    build_patch,
    calculate_line_offsets,
    combine_hunk_patches,
    count_line_totals,
    create_hunk,
    create_sub_hunk,
)

# Coverage
from hunkindex.review.coverage import (
    complement_intervals,
    format_uncovered_message,
    get_uncovered_portions,
    initialize_coverage,
    mark_covered,
    mark_hunk_fully_covered,
    merge_intervals,
    update_coverage_from_group,
)

# Context
from hunkindex.review.context import (
    format_hunk_listing,
    hunks_to_context_xml,
)

# Review YAML
from hunkindex.review.groups import (
    parse_review_yaml,
    read_review_yaml,
)


__all__ = [
    # Models
    "LineKind",
    "DiffLine",
    "Hunk",
    "HunkKey",
    "FileDiff",
    "ParsedDiff",
    "StableHunkRef",
    "ReviewGroup",
    "ReviewDocument",
    "CoverageState",
    "HunkCoverage",
    "ReviewCoverage",
    "UncoveredPortion",
    # Exceptions
    "HunkError",
    "ParseError",
    "InvalidHunkId",
    "RangeError",
    "CombineConflict",
    "UnknownHunkError",
    "NoHunksError",
    # Parser
    "parse_unified_diff",
    "parse_hunks_with_ids",
    "create_hunk_map",
    # Addressing
    "hunk_to_stable_id",
    "parse_hunk_id",
    "find_hunk_by_stable_id",
    # Patch
    "LineOffsets",
    "count_line_totals",
    "build_patch",
    "create_hunk",
    "calculate_line_offsets",
    "create_sub_hunk",
    "combine_hunk_patches",
    # Coverage
    "merge_intervals",
    "complement_intervals",
    "initialize_coverage",
    "mark_covered",
    "mark_hunk_fully_covered",
    "update_coverage_from_group",
    "get_uncovered_portions",
    "format_uncovered_message",
    # Context
    "hunks_to_context_xml",
    "format_hunk_listing",
    # Review YAML
    "parse_review_yaml",
    "read_review_yaml",
]
