"""Shared utility functions for CLI commands."""

import sys
from pathlib import Path

import typer

from hunkindex.config import ReviewSettings
from hunkindex.review import (
    Hunk,
    NoHunksError,
    ParsedDiff,
    find_hunk_by_stable_id,
    parse_hunks_with_ids,
)


def read_diff_text(source: str) -> str:
    """Read diff text from a file path, or from stdin when source is '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text()


def load_hunks(source: str) -> ParsedDiff:
    """Read and parse a diff, echoing parser warnings to stderr.

    Raises:
        NoHunksError: If the diff contains no hunks
    """
    parsed = parse_hunks_with_ids(read_diff_text(source))
    for warning in parsed.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    if not parsed.hunks:
        raise NoHunksError("No hunks found in diff")
    return parsed


def require_hunk(hunks: list[Hunk], stable_id: str) -> Hunk:
    """Look up a hunk by stable ID, exiting when it no longer exists."""
    hunk = find_hunk_by_stable_id(hunks, stable_id)
    if hunk is None:
        typer.echo(f"Hunk {stable_id} no longer exists in this diff.", err=True)
        raise typer.Exit(1)
    return hunk


def get_settings(ctx: typer.Context) -> ReviewSettings:
    """Get settings loaded by the main callback (defaults if absent)."""
    if isinstance(ctx.obj, ReviewSettings):
        return ctx.obj
    return ReviewSettings()
