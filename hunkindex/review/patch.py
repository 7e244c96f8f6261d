"""Patch building for hunkindex review module.

Contains:
- count_line_totals: Tally old/new line counts of hunk body lines
- build_patch: Render a filename, coordinates and lines as a unified diff
- create_hunk: Build a Hunk with tallied counts
- calculate_line_offsets: Old/new lines consumed before a body index
- create_sub_hunk: Extract a line range of a hunk as a standalone hunk
- combine_hunk_patches: Combine hunks of one file into a single patch
"""

from typing import NamedTuple, Sequence, Union

from hunkindex.review.exceptions import CombineConflict, RangeError
from hunkindex.review.models import NO_NEWLINE_MARKER, DiffLine, Hunk


class LineOffsets(NamedTuple):
    """Old and new file lines consumed by a prefix of a hunk body."""

    old_offset: int
    new_offset: int


def count_line_totals(lines: Sequence[DiffLine]) -> tuple[int, int]:
    """Tally (old_lines, new_lines) for hunk body lines.

    Context lines count toward both sides, removed lines toward old only,
    added lines toward new only.
    """
    old_lines = sum(1 for line in lines if line.kind.counts_old)
    new_lines = sum(1 for line in lines if line.kind.counts_new)
    return old_lines, new_lines


def _render_lines(lines: Sequence[DiffLine]) -> list[str]:
    rendered: list[str] = []
    for line in lines:
        rendered.append(line.raw)
        if line.no_newline:
            rendered.append(NO_NEWLINE_MARKER)
    return rendered


def _hunk_header(old_start: int, old_lines: int, new_start: int, new_lines: int) -> str:
    return f"@@ -{old_start},{old_lines} +{new_start},{new_lines} @@"


def build_patch(
    filename: str, old_start: int, new_start: int, lines: Sequence[DiffLine]
) -> str:
    """Build a valid single-hunk unified diff from body lines.

    Works for full hunks and for split sub-hunks; the line counts in the @@
    header are recomputed from ``lines``.

    Args:
        filename: File path without a/ or b/ prefix
        old_start: Starting line number in the old file
        new_start: Starting line number in the new file
        lines: Hunk body lines

    Returns:
        Patch content as string
    """
    old_lines, new_lines = count_line_totals(lines)
    patch_lines = [
        f"--- a/{filename}",
        f"+++ b/{filename}",
        _hunk_header(old_start, old_lines, new_start, new_lines),
    ]
    patch_lines.extend(_render_lines(lines))

    # git apply requires the patch to end with a newline
    return "\n".join(patch_lines) + "\n"


def create_hunk(
    id: int,
    filename: str,
    hunk_index: int,
    old_start: int,
    new_start: int,
    lines: Sequence[Union[DiffLine, str]],
) -> Hunk:
    """Create a Hunk from basic parameters, tallying its line counts.

    ``lines`` may mix DiffLine objects and marked strings such as "+added".

    Raises:
        ParseError: If a string line has no valid prefix
        RangeError: If ``lines`` is empty
    """
    body = tuple(line if isinstance(line, DiffLine) else DiffLine.parse(line) for line in lines)
    if not body:
        raise RangeError("A hunk must contain at least one line")

    old_lines, new_lines = count_line_totals(body)
    return Hunk(
        id=id,
        filename=filename,
        hunk_index=hunk_index,
        old_start=old_start,
        old_lines=old_lines,
        new_start=new_start,
        new_lines=new_lines,
        lines=body,
    )


def calculate_line_offsets(lines: Sequence[DiffLine], index: int) -> LineOffsets:
    """Count old and new file lines in ``lines[:index]``.

    An ``index`` past the end counts every line.
    """
    old_offset, new_offset = count_line_totals(lines[:max(index, 0)])
    return LineOffsets(old_offset, new_offset)


def create_sub_hunk(hunk: Hunk, start_index: int, end_index: int) -> Hunk:
    """Extract ``hunk.lines[start_index:end_index]`` as a standalone hunk.

    The sub-hunk starts where the skipped prefix of the hunk ends on each
    side, and keeps the source hunk's ID, filename and index.

    Args:
        hunk: Source hunk
        start_index: First body line to include
        end_index: Body line to stop before

    Returns:
        New Hunk with recomputed coordinates

    Raises:
        RangeError: If the range is empty, inverted or out of bounds
    """
    total = len(hunk.lines)
    if not (0 <= start_index <= total and 0 <= end_index <= total):
        raise RangeError(
            f"Line range [{start_index}, {end_index}) is outside hunk of {total} lines"
        )
    if start_index >= end_index:
        raise RangeError(
            f"Line range [{start_index}, {end_index}) is empty: a sub-hunk needs at least one line"
        )

    offsets = calculate_line_offsets(hunk.lines, start_index)
    sub_lines = hunk.lines[start_index:end_index]
    old_lines, new_lines = count_line_totals(sub_lines)

    return Hunk(
        id=hunk.id,
        filename=hunk.filename,
        hunk_index=hunk.hunk_index,
        old_start=hunk.old_start + offsets.old_offset,
        old_lines=old_lines,
        new_start=hunk.new_start + offsets.new_offset,
        new_lines=new_lines,
        lines=sub_lines,
    )


def combine_hunk_patches(hunks: Sequence[Hunk]) -> str:
    """Combine hunks of one file into a single patch.

    Hunks are sorted by old_start and emitted as separate @@ blocks under one
    file header.

    Args:
        hunks: Hunks or sub-hunks that all belong to the same file

    Returns:
        Patch content as string

    Raises:
        CombineConflict: If hunks is empty, spans several files, or contains
            hunks whose old line ranges overlap
    """
    if not hunks:
        raise CombineConflict("No hunks to combine")

    filenames = sorted({hunk.filename for hunk in hunks})
    if len(filenames) > 1:
        raise CombineConflict(
            f"Cannot combine hunks from different files: {', '.join(filenames)}"
        )

    ordered = sorted(hunks, key=lambda h: h.old_start)
    for previous, current in zip(ordered, ordered[1:]):
        previous_end = previous.old_start + previous.old_lines
        if current.old_start == previous.old_start or current.old_start < previous_end:
            raise CombineConflict(
                f"Hunks overlap in {filenames[0]}: "
                f"old lines [{previous.old_start}, {previous_end}) and "
                f"[{current.old_start}, {current.old_start + current.old_lines})"
            )

    patch_lines = [f"--- a/{filenames[0]}", f"+++ b/{filenames[0]}"]
    for hunk in ordered:
        patch_lines.append(
            _hunk_header(hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines)
        )
        patch_lines.extend(_render_lines(hunk.lines))

    # git apply requires the patch to end with a newline
    return "\n".join(patch_lines) + "\n"
