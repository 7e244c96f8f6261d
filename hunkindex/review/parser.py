"""Diff parser for hunkindex review module.

Contains functions for parsing unified diff output:
- parse_unified_diff: Parse unified diff text into per-file hunks
- parse_hunks_with_ids: Parse unified diff text into a flat, numbered hunk list
- create_hunk_map: Map hunk keys to hunks for quick lookup
- _parse_hunk: Parse a single @@ block starting at a given line
"""

import dataclasses
import logging
import re
from typing import Callable, Iterable, Optional

from hunkindex.review.exceptions import ParseError
from hunkindex.review.models import (
    DiffLine,
    FileDiff,
    Hunk,
    HunkKey,
    ParsedDiff,
    ephemeral_key,
)

logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"

# Format: @@ -old_start[,old_len] +new_start[,new_len] @@ optional context
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@", re.ASCII)
# Trailing "\t<timestamp>" from diff -u, or the bare tab git adds after names with spaces
_PATH_SUFFIX_RE = re.compile(
    r"\t(?:(?:\d{4}-\d{2}-\d{2}|[A-Z][a-z]{2} [A-Z][a-z]{2} )[^\t]*)?$"
)
_DIFF_GIT_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")


def parse_unified_diff(
    diff_text: str, start_id: int = 1
) -> tuple[list[FileDiff], list[str]]:
    """Parse unified diff text into per-file hunks.

    Accepts both ``git diff`` output and plain ``---``/``+++`` diffs such as
    the ones produced by ``build_patch``. Hunk IDs are assigned from
    ``start_id`` upwards in file order, then hunk order.

    Args:
        diff_text: Raw unified diff text
        start_id: ID given to the first hunk

    Returns:
        Tuple of (list of FileDiff objects, list of warning messages)

    Raises:
        ParseError: If a hunk header or body line is malformed
    """
    files: list[FileDiff] = []
    warnings: list[str] = []

    if not diff_text.strip():
        return files, warnings

    lines = diff_text.split("\n")
    if lines[-1] == "":
        lines.pop()

    current: Optional[FileDiff] = None
    seen_file_header = False
    hunk_id = start_id
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith("diff --git "):
            current = _start_git_file(line)
            files.append(current)
            seen_file_header = False
            i += 1
            continue

        if (
            line.startswith("--- ")
            and i + 1 < len(lines)
            and lines[i + 1].startswith("+++ ")
        ):
            # A second ---/+++ pair without 'diff --git' starts a new file
            if current is None or seen_file_header:
                current = FileDiff(file_path="")
                files.append(current)
            _apply_file_header(current, line, lines[i + 1])
            seen_file_header = True
            i += 2
            continue

        if line.startswith("@@"):
            if current is None:
                current = FileDiff(file_path="unknown")
                files.append(current)
            hunk, i = _parse_hunk(lines, i, hunk_id, current)
            current.hunks.append(hunk)
            hunk_id += 1
            continue

        if current is not None and current.hunks:
            if line == "-- ":
                # Signature separator of 'git format-patch' output
                break
            if line.startswith(("+", "-", " ")):
                raise ParseError(
                    "diff line outside of any hunk (header counts too small?)",
                    i + 1,
                )
        elif current is not None:
            current.header_lines.append(line)
            _apply_extended_header(current, line, warnings)

        i += 1

    return files, warnings


def parse_hunks_with_ids(diff_text: str, start_id: int = 1) -> ParsedDiff:
    """Parse unified diff text into a flat list of numbered hunks.

    The numbering is local to this call. Pass the returned ``next_id`` as
    ``start_id`` to continue numbering in a later call.

    Args:
        diff_text: Raw unified diff text
        start_id: ID given to the first hunk

    Returns:
        ParsedDiff of (hunks, next_id, warnings)
    """
    files, warnings = parse_unified_diff(diff_text, start_id)
    hunks = [hunk for file_diff in files for hunk in file_diff.hunks]
    return ParsedDiff(hunks=hunks, next_id=start_id + len(hunks), warnings=warnings)


def create_hunk_map(
    hunks: Iterable[Hunk], key: Optional[Callable[[Hunk], HunkKey]] = None
) -> dict[HunkKey, Hunk]:
    """Get a map of hunk keys to hunks for quick lookup.

    Args:
        hunks: Hunks to index
        key: Function computing the key of a hunk (default: its ephemeral ID)

    Returns:
        Dictionary mapping key to Hunk
    """
    key = key or ephemeral_key
    return {key(hunk): hunk for hunk in hunks}


def _start_git_file(line: str) -> FileDiff:
    """Create a FileDiff from a 'diff --git a/... b/...' line."""
    match = _DIFF_GIT_RE.match(line)
    if not match:
        return FileDiff(file_path="unknown", header_lines=[line])

    old_path = match.group(1)
    new_path = match.group(2)
    is_renamed = old_path != new_path
    return FileDiff(
        file_path=new_path,
        header_lines=[line],
        is_renamed=is_renamed,
        old_path=old_path if is_renamed else None,
    )


def _strip_path(raw: str, prefix: str) -> str:
    """Extract the path from a '---'/'+++' header value."""
    path = _PATH_SUFFIX_RE.sub("", raw)
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    if path != DEV_NULL and path.startswith(prefix):
        path = path[len(prefix):]
    return path


def _apply_file_header(file_diff: FileDiff, old_line: str, new_line: str) -> None:
    """Resolve the file path from a '---'/'+++' pair.

    The post-image path wins; deleted files fall back to the pre-image path.
    """
    old_path = _strip_path(old_line[4:], "a/")
    new_path = _strip_path(new_line[4:], "b/")

    file_diff.header_lines.extend([old_line, new_line])
    file_diff.file_path = new_path if new_path != DEV_NULL else old_path
    if old_path == DEV_NULL:
        file_diff.is_new_file = True
    if new_path == DEV_NULL:
        file_diff.is_deleted_file = True
    if DEV_NULL not in (old_path, new_path) and old_path != new_path:
        file_diff.is_renamed = True
        file_diff.old_path = old_path


def _apply_extended_header(file_diff: FileDiff, line: str, warnings: list[str]) -> None:
    """Record git extended header information (mode, binary)."""
    if line.startswith("new file mode"):
        file_diff.is_new_file = True
    elif line.startswith("deleted file mode"):
        file_diff.is_deleted_file = True
    elif "GIT binary patch" in line or line.startswith("Binary files"):
        if not file_diff.is_binary:
            file_diff.is_binary = True
            warnings.append(f"Binary file skipped: {file_diff.file_path}")
            logger.debug("Skipping binary file %s", file_diff.file_path)


def _parse_hunk(
    lines: list[str], start: int, hunk_id: int, file_diff: FileDiff
) -> tuple[Hunk, int]:
    """Parse the @@ block starting at lines[start].

    The body is consumed by the counts declared in the header, so body lines
    that look like file headers are read as body lines.

    Args:
        lines: All lines of the diff
        start: Index of the @@ header line
        hunk_id: ID for the new hunk
        file_diff: File the hunk belongs to

    Returns:
        Tuple of (Hunk, index of the first line after the hunk)

    Raises:
        ParseError: If the header or any body line is malformed
    """
    header = lines[start]
    match = _HUNK_HEADER_RE.match(header)
    if not match:
        raise ParseError(f"malformed hunk header: {header!r}", start + 1)

    old_start = int(match.group(1))
    old_len = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_len = int(match.group(4)) if match.group(4) is not None else 1

    old_remaining = old_len
    new_remaining = new_len
    body: list[DiffLine] = []
    i = start + 1

    while old_remaining > 0 or new_remaining > 0:
        if i >= len(lines):
            raise ParseError(
                f"hunk {header!r} ends early: expected {old_remaining} more old "
                f"and {new_remaining} more new lines",
                start + 1,
            )
        raw = lines[i]
        if raw.startswith("\\"):
            if body:
                body[-1] = dataclasses.replace(body[-1], no_newline=True)
            i += 1
            continue

        diff_line = DiffLine.parse(raw, i + 1)
        if diff_line.kind.counts_old:
            if old_remaining == 0:
                raise ParseError(
                    f"hunk {header!r} has more old lines than declared", i + 1
                )
            old_remaining -= 1
        if diff_line.kind.counts_new:
            if new_remaining == 0:
                raise ParseError(
                    f"hunk {header!r} has more new lines than declared", i + 1
                )
            new_remaining -= 1
        body.append(diff_line)
        i += 1

    # The last body line may carry a no-newline marker
    if i < len(lines) and lines[i].startswith("\\") and body:
        body[-1] = dataclasses.replace(body[-1], no_newline=True)
        i += 1

    if not body:
        raise ParseError(f"hunk {header!r} has no lines", start + 1)

    hunk = Hunk(
        id=hunk_id,
        filename=file_diff.file_path or "unknown",
        hunk_index=len(file_diff.hunks),
        old_start=old_start,
        old_lines=old_len,
        new_start=new_start,
        new_lines=new_len,
        lines=tuple(body),
    )
    return hunk, i
