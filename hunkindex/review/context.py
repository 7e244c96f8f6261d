"""Hunk context formatting for hunkindex review module.

Contains functions for presenting parsed hunks:
- hunks_to_context_xml: Wrap each hunk in <hunk> tags for a reviewing agent
- format_hunk_listing: Human-readable listing of hunks with stable IDs
"""

from typing import Sequence

from hunkindex.review.addressing import hunk_to_stable_id
from hunkindex.review.models import Hunk


def hunks_to_context_xml(hunks: Sequence[Hunk]) -> str:
    """Convert hunks to XML context for a review prompt.

    Args:
        hunks: Parsed hunks (IDs must be unique)

    Returns:
        One <hunk> element per hunk, separated by blank lines
    """
    lines: list[str] = []

    for hunk in hunks:
        old_end = hunk.old_start + hunk.old_lines
        lines.append(
            f'<hunk id="{hunk.id}" file="{hunk.filename}" lines="{hunk.old_start}-{old_end}">'
        )
        lines.append(hunk.raw_diff.strip())
        lines.append("</hunk>")
        lines.append("")

    return "\n".join(lines)


def format_hunk_listing(hunks: Sequence[Hunk], max_snippet_lines: int = 5) -> str:
    """Format hunks grouped by file, each labelled with its stable ID.

    Args:
        hunks: Parsed hunks
        max_snippet_lines: Maximum changed lines to show per hunk

    Returns:
        Formatted listing
    """
    lines = ["[HUNKS]"]
    current_file = None

    for hunk in hunks:
        if hunk.filename != current_file:
            current_file = hunk.filename
            lines.append(f"\nFile: {hunk.filename}")

        lines.append(f"\n  Hunk {hunk.id}: {hunk_to_stable_id(hunk)}")
        lines.append(f"    {hunk.header}")
        snippet = hunk.snippet(max_snippet_lines)
        for snippet_line in snippet.split("\n"):
            lines.append(f"    {snippet_line}")

    return "\n".join(lines)
