"""Stable hunk addressing for hunkindex review module.

A stable ID is derived only from a hunk's filename and header coordinates,
so independent parses of the same diff produce the same IDs:

    src/main.py:@-10,6+10,7

External commands accept these IDs as user input; the format must not change.
Filenames are not escaped, so a filename containing ":@-" cannot be
addressed reliably.

Contains:
- hunk_to_stable_id: Format the stable ID of a hunk
- parse_hunk_id: Decode a stable ID back into its coordinates
- find_hunk_by_stable_id: Look up a hunk by stable ID
"""

import re
from typing import Iterable, Optional

from hunkindex.review.exceptions import InvalidHunkId
from hunkindex.review.models import Hunk, StableHunkRef

STABLE_ID_MARKER = ":@-"

_COORDINATES_RE = re.compile(r"(\d+),(\d+)\+(\d+),(\d+)", re.ASCII)


def hunk_to_stable_id(hunk: Hunk) -> str:
    """Format the stable ID of a hunk."""
    return (
        f"{hunk.filename}{STABLE_ID_MARKER}"
        f"{hunk.old_start},{hunk.old_lines}+{hunk.new_start},{hunk.new_lines}"
    )


def parse_hunk_id(stable_id: str) -> StableHunkRef:
    """Decode a stable ID into (filename, old_start, old_lines, new_start, new_lines).

    The last ":@-" in the string is the separator, so filenames containing
    colons are fine.

    Args:
        stable_id: ID as produced by hunk_to_stable_id

    Returns:
        StableHunkRef with the decoded coordinates

    Raises:
        InvalidHunkId: If the ID does not have the expected shape
    """
    marker_pos = stable_id.rfind(STABLE_ID_MARKER)
    if marker_pos <= 0:
        raise InvalidHunkId(
            f"Invalid hunk ID {stable_id!r}: expected <file>:@-<old>,<len>+<new>,<len>"
        )

    filename = stable_id[:marker_pos]
    match = _COORDINATES_RE.fullmatch(stable_id[marker_pos + len(STABLE_ID_MARKER):])
    if not match:
        raise InvalidHunkId(
            f"Invalid hunk ID {stable_id!r}: coordinates must be "
            f"<old_start>,<old_lines>+<new_start>,<new_lines>"
        )

    old_start, old_lines, new_start, new_lines = (int(g) for g in match.groups())
    return StableHunkRef(filename, old_start, old_lines, new_start, new_lines)


def find_hunk_by_stable_id(hunks: Iterable[Hunk], stable_id: str) -> Optional[Hunk]:
    """Return the first hunk whose stable ID equals ``stable_id``.

    Returns None when nothing matches, which is expected once the working
    tree has changed since the ID was issued.
    """
    for hunk in hunks:
        if hunk_to_stable_id(hunk) == stable_id:
            return hunk
    return None
