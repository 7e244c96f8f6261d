"""Data models for hunkindex review module.

Contains:
- LineKind: Closed set of diff line kinds (context, add, remove)
- DiffLine: A single body line of a hunk
- Hunk: A single @@ block of a unified diff
- FileDiff: Diff for a single file containing multiple hunks
- ParsedDiff: Flattened parse result with the next free hunk ID
- StableHunkRef: Coordinates decoded from a stable hunk ID
- ReviewGroup: One group of hunks (or hunk lines) explained together
- ReviewDocument: The full review YAML document
- HunkCoverage, ReviewCoverage, UncoveredPortion: Coverage tracking state
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hunkindex.review.exceptions import ParseError


# Ephemeral IDs are ints, stable IDs are strings
HunkKey = Union[int, str]

NO_NEWLINE_MARKER = "\\ No newline at end of file"


class LineKind(Enum):
    """Kind of a hunk body line, valued by its diff marker."""

    CONTEXT = " "
    ADD = "+"
    REMOVE = "-"

    @property
    def marker(self) -> str:
        return self.value

    @property
    def counts_old(self) -> bool:
        """Whether the line exists in the pre-image."""
        return self is not LineKind.ADD

    @property
    def counts_new(self) -> bool:
        """Whether the line exists in the post-image."""
        return self is not LineKind.REMOVE


@dataclass(frozen=True)
class DiffLine:
    """A single body line of a hunk."""

    kind: LineKind
    text: str
    no_newline: bool = False  # Followed by "\ No newline at end of file"

    @classmethod
    def parse(cls, raw: str, line_number: Optional[int] = None) -> "DiffLine":
        """Build a DiffLine from its marked form (e.g. "+added").

        Raises:
            ParseError: If the line does not start with space, '+' or '-'.
        """
        if not raw:
            raise ParseError("empty line inside hunk body", line_number)
        try:
            kind = LineKind(raw[0])
        except ValueError:
            raise ParseError(
                f"invalid diff line prefix {raw[0]!r}: {raw!r}", line_number
            ) from None
        return cls(kind=kind, text=raw[1:])

    @property
    def raw(self) -> str:
        """The line as it appears in a unified diff."""
        return self.kind.marker + self.text

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Hunk:
    """A single @@ block of a unified diff.

    ``id`` is only meaningful within the parse call that produced it. Use
    ``hunk_to_stable_id`` for anything that outlives that call.
    """

    id: int
    filename: str
    hunk_index: int  # Position within its file (0-based)
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: tuple[DiffLine, ...]

    @property
    def raw_diff(self) -> str:
        """The hunk rendered as a standalone single-file patch."""
        from hunkindex.review.patch import build_patch

        return build_patch(self.filename, self.old_start, self.new_start, self.lines)

    @property
    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@"

    def snippet(self, max_lines: int = 5) -> str:
        """Get a snippet of the hunk's changed lines for display."""
        content_lines = [ln.raw for ln in self.lines if ln.kind is not LineKind.CONTEXT]
        if len(content_lines) <= max_lines:
            return "\n".join(content_lines)
        return "\n".join(content_lines[:max_lines]) + f"\n... ({len(content_lines) - max_lines} more lines)"


@dataclass
class FileDiff:
    """Diff for a single file containing multiple hunks."""

    file_path: str
    header_lines: list[str] = field(default_factory=list)  # From 'diff --git' up to first @@
    hunks: list[Hunk] = field(default_factory=list)
    is_binary: bool = False
    is_new_file: bool = False
    is_deleted_file: bool = False
    is_renamed: bool = False
    old_path: Optional[str] = None  # For renames


class ParsedDiff(NamedTuple):
    """Hunks of one parse call, in file order then hunk order."""

    hunks: list[Hunk]
    next_id: int  # First ID not used by this parse
    warnings: list[str]


class StableHunkRef(NamedTuple):
    """Coordinates decoded from a stable hunk ID."""

    filename: str
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int


class ReviewGroup(BaseModel):
    """A group of hunks, or a line range of one hunk, explained together.

    ``line_range`` uses 1-based inclusive line numbers, matching the
    ``cat -n`` numbering the reviewing agent sees. It only applies to
    ``hunk_id``; hunks listed in ``hunk_ids`` are always covered whole.
    """

    model_config = ConfigDict(populate_by_name=True)

    hunk_ids: Optional[list[HunkKey]] = Field(default=None, alias="hunkIds")
    hunk_id: Optional[HunkKey] = Field(default=None, alias="hunkId")
    line_range: Optional[tuple[int, int]] = Field(default=None, alias="lineRange")
    markdown_description: str = Field(default="", alias="markdownDescription")

    @model_validator(mode="after")
    def require_hunk_reference(self) -> "ReviewGroup":
        """Reject groups that reference no hunk at all."""
        if self.hunk_ids is None and self.hunk_id is None:
            raise ValueError("review group needs hunkIds or hunkId")
        return self

    def assignments(self) -> list[tuple[HunkKey, Optional[tuple[int, int]]]]:
        """Return (hunk key, half-open line range) pairs.

        A range of None means the whole hunk.
        """
        result: list[tuple[HunkKey, Optional[tuple[int, int]]]] = []
        for hunk_id in self.hunk_ids or []:
            result.append((hunk_id, None))
        if self.hunk_id is not None:
            line_range = None
            if self.line_range is not None:
                first, last = self.line_range
                line_range = (first - 1, last)
            result.append((self.hunk_id, line_range))
        return result


class ReviewDocument(BaseModel):
    """The review YAML written by the reviewing agent."""

    hunks: list[ReviewGroup] = []


class CoverageState(Enum):
    """How much of a hunk has been accounted for."""

    UNSEEN = "unseen"
    PARTIALLY_COVERED = "partially_covered"
    FULLY_COVERED = "fully_covered"


@dataclass
class HunkCoverage:
    """Covered line-index intervals of one hunk.

    ``covered_ranges`` holds half-open ``(start, end)`` intervals over
    ``range(total_lines)``, kept sorted and merged.
    """

    hunk_id: HunkKey
    total_lines: int
    covered_ranges: list[tuple[int, int]] = field(default_factory=list)

    @property
    def covered_count(self) -> int:
        return sum(end - start for start, end in self.covered_ranges)

    @property
    def state(self) -> CoverageState:
        if not self.covered_ranges:
            return CoverageState.UNSEEN
        if self.covered_ranges == [(0, self.total_lines)]:
            return CoverageState.FULLY_COVERED
        return CoverageState.PARTIALLY_COVERED


def ephemeral_key(hunk: Hunk) -> HunkKey:
    """Default coverage key: the parse-local hunk ID."""
    return hunk.id


@dataclass
class ReviewCoverage:
    """Per-hunk coverage for one review session.

    ``key`` decides how hunks are identified (ephemeral or stable ID) and
    must stay the same for the whole session.
    """

    hunks: dict[HunkKey, HunkCoverage] = field(default_factory=dict)
    key: Callable[[Hunk], HunkKey] = ephemeral_key

    def _count(self, state: CoverageState) -> int:
        return sum(1 for cov in self.hunks.values() if cov.state is state)

    @property
    def total_hunks(self) -> int:
        return len(self.hunks)

    @property
    def unexplained_hunks(self) -> int:
        return self._count(CoverageState.UNSEEN)

    @property
    def partially_explained_hunks(self) -> int:
        return self._count(CoverageState.PARTIALLY_COVERED)

    @property
    def fully_explained_hunks(self) -> int:
        return self._count(CoverageState.FULLY_COVERED)


@dataclass
class UncoveredPortion:
    """The part of a hunk that no review group has covered yet."""

    hunk_id: HunkKey
    filename: str
    ranges: list[tuple[int, int]]  # Half-open line-index intervals
    preview_text: str
