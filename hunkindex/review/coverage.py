"""Review coverage tracking for hunkindex review module.

Coverage records which body lines of each hunk a review has accounted for,
as half-open ``(start, end)`` line-index intervals. Coverage only grows:
no operation here removes a covered line.

Contains:
- merge_intervals: Sort and merge overlapping or touching intervals
- complement_intervals: Intervals not covered within range(length)
- initialize_coverage: Start tracking hunks
- mark_covered: Add a line range to a hunk's coverage
- mark_hunk_fully_covered: Cover every line of a hunk
- update_coverage_from_group: Apply one review group
- get_uncovered_portions: Report what remains uncovered
- format_uncovered_message: Human-readable summary of uncovered portions
"""

import logging
from typing import Callable, Iterable, Mapping, Optional

from hunkindex.review.exceptions import RangeError, UnknownHunkError
from hunkindex.review.models import (
    Hunk,
    HunkCoverage,
    HunkKey,
    ReviewCoverage,
    ReviewGroup,
    UncoveredPortion,
)

logger = logging.getLogger(__name__)

Interval = tuple[int, int]


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Merge intervals into a sorted list of disjoint, non-touching intervals.

    Empty intervals are dropped.
    """
    ordered = sorted((start, end) for start, end in intervals if start < end)
    merged: list[Interval] = []
    for start, end in ordered:
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def complement_intervals(intervals: Iterable[Interval], length: int) -> list[Interval]:
    """Return the parts of ``range(length)`` not covered by ``intervals``."""
    gaps: list[Interval] = []
    cursor = 0
    for start, end in merge_intervals(intervals):
        start, end = max(start, 0), min(end, length)
        if start > cursor:
            gaps.append((cursor, start))
        cursor = max(cursor, end)
    if cursor < length:
        gaps.append((cursor, length))
    return gaps


def initialize_coverage(
    hunks: Iterable[Hunk],
    coverage: Optional[ReviewCoverage] = None,
    key: Optional[Callable[[Hunk], HunkKey]] = None,
) -> ReviewCoverage:
    """Start tracking coverage for hunks.

    Hunks already tracked keep their coverage, so calling this again is safe.

    Args:
        hunks: Hunks entering review
        coverage: Existing coverage to extend (a new one is created if None)
        key: Key function for a new coverage (default: ephemeral hunk ID)

    Returns:
        The coverage object
    """
    if coverage is None:
        coverage = ReviewCoverage(key=key) if key is not None else ReviewCoverage()

    for hunk in hunks:
        hunk_key = coverage.key(hunk)
        if hunk_key not in coverage.hunks:
            coverage.hunks[hunk_key] = HunkCoverage(
                hunk_id=hunk_key, total_lines=len(hunk.lines)
            )
    return coverage


def _get_hunk_coverage(coverage: ReviewCoverage, hunk_id: HunkKey) -> HunkCoverage:
    try:
        return coverage.hunks[hunk_id]
    except KeyError:
        raise UnknownHunkError(f"Hunk {hunk_id} is not tracked") from None


def mark_covered(coverage: ReviewCoverage, hunk_id: HunkKey, line_range: Interval) -> None:
    """Add the half-open ``line_range`` to a hunk's coverage.

    The range is clamped to the hunk's lines.

    Raises:
        RangeError: If the range is inverted
        UnknownHunkError: If the hunk is not tracked
    """
    start, end = line_range
    if start > end:
        raise RangeError(f"Inverted line range [{start}, {end}) for hunk {hunk_id}")

    hunk_coverage = _get_hunk_coverage(coverage, hunk_id)
    start = max(start, 0)
    end = min(end, hunk_coverage.total_lines)
    if start >= end:
        return

    hunk_coverage.covered_ranges = merge_intervals(
        hunk_coverage.covered_ranges + [(start, end)]
    )


def mark_hunk_fully_covered(coverage: ReviewCoverage, hunk_id: HunkKey) -> None:
    """Cover every line of a hunk.

    Raises:
        UnknownHunkError: If the hunk is not tracked
    """
    hunk_coverage = _get_hunk_coverage(coverage, hunk_id)
    if hunk_coverage.total_lines > 0:
        hunk_coverage.covered_ranges = [(0, hunk_coverage.total_lines)]


def update_coverage_from_group(
    hunk_map: Mapping[HunkKey, Hunk],
    coverage: ReviewCoverage,
    group: ReviewGroup,
) -> list[str]:
    """Apply every hunk assignment of a review group.

    Bad references (unknown hunk, inverted range) are skipped so that the
    rest of the group still counts.

    Args:
        hunk_map: Mapping of hunk key to Hunk for this session
        coverage: Coverage to update
        group: Review group to apply

    Returns:
        List of warning messages for skipped assignments
    """
    warnings: list[str] = []

    for hunk_id, line_range in group.assignments():
        hunk = hunk_map.get(hunk_id)
        if hunk is None:
            message = f"Review group references unknown hunk: {hunk_id}"
            logger.warning(message)
            warnings.append(message)
            continue

        initialize_coverage([hunk], coverage)
        coverage_key = coverage.key(hunk)
        if line_range is None:
            mark_hunk_fully_covered(coverage, coverage_key)
            continue

        try:
            # Check the 1-based range; [n + 1, n] converts to an empty range
            first, last = group.line_range
            if first > last:
                raise RangeError(
                    f"Inverted line range [{first}, {last}] for hunk {hunk_id}"
                )
            mark_covered(coverage, coverage_key, line_range)
        except RangeError as e:
            logger.warning("Skipping review group range: %s", e)
            warnings.append(str(e))

    return warnings


def _preview(hunk: Hunk, line_range: Interval, max_lines: int, width: int) -> str:
    start, end = line_range
    preview_lines: list[str] = []
    for line in hunk.lines[start:min(end, start + max_lines)]:
        text = line.raw
        if len(text) > width:
            text = text[:width] + "..."
        preview_lines.append(text)
    if end - start > max_lines:
        preview_lines.append("...")
    return "\n".join(preview_lines)


def get_uncovered_portions(
    hunk_map: Mapping[HunkKey, Hunk],
    coverage: ReviewCoverage,
    preview_lines: int = 2,
    preview_width: int = 80,
) -> list[UncoveredPortion]:
    """Report the uncovered line ranges of every hunk.

    Hunks without a coverage entry count as entirely uncovered. Fully covered
    hunks are left out.

    Args:
        hunk_map: Mapping of hunk key to Hunk for this session
        coverage: Current coverage
        preview_lines: Lines of the first uncovered range to show
        preview_width: Maximum characters per preview line

    Returns:
        List of UncoveredPortion, in hunk_map order
    """
    portions: list[UncoveredPortion] = []

    for hunk_id, hunk in hunk_map.items():
        if not hunk.lines:
            continue
        hunk_coverage = coverage.hunks.get(hunk_id)
        covered = hunk_coverage.covered_ranges if hunk_coverage else []
        gaps = complement_intervals(covered, len(hunk.lines))
        if not gaps:
            continue
        portions.append(
            UncoveredPortion(
                hunk_id=hunk_id,
                filename=hunk.filename,
                ranges=gaps,
                preview_text=_preview(hunk, gaps[0], preview_lines, preview_width),
            )
        )

    return portions


def _format_ranges(ranges: list[Interval]) -> str:
    # Shown 1-based and inclusive, the numbering used in review groups
    parts = []
    for start, end in ranges:
        parts.append(f"{start + 1}" if end - start == 1 else f"{start + 1}-{end}")
    return ", ".join(parts)


def _sort_key(portion: UncoveredPortion) -> tuple:
    hunk_id = portion.hunk_id
    if isinstance(hunk_id, int):
        return (portion.filename, 0, hunk_id, "")
    return (portion.filename, 1, 0, hunk_id)


def format_uncovered_message(portions: list[UncoveredPortion]) -> str:
    """Format uncovered portions as text for a human or a reviewing agent.

    Portions are sorted by filename, then hunk ID, so the output does not
    depend on input order.
    """
    if not portions:
        return "All hunks are fully explained."

    lines = [f"{len(portions)} hunk(s) are not explained yet:"]
    for portion in sorted(portions, key=_sort_key):
        line_count = sum(end - start for start, end in portion.ranges)
        lines.append("")
        lines.append(
            f"Hunk #{portion.hunk_id} ({portion.filename}): "
            f"lines {_format_ranges(portion.ranges)} ({line_count} lines)"
        )
        for preview_line in portion.preview_text.split("\n"):
            if preview_line:
                lines.append(f"    {preview_line}")

    lines.append("")
    lines.append("Add review groups covering these lines.")
    return "\n".join(lines)
