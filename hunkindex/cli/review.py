"""CLI commands for review context and coverage reports."""

from pathlib import Path

import typer

from hunkindex.review import (
    HunkError,
    create_hunk_map,
    format_uncovered_message,
    get_uncovered_portions,
    hunk_to_stable_id,
    hunks_to_context_xml,
    initialize_coverage,
    read_review_yaml,
    update_coverage_from_group,
)
from hunkindex.cli.utils import get_settings, load_hunks


def context_command(
    diff: str = typer.Argument("-", help="Diff file to read ('-' for stdin)"),
) -> None:
    """Print hunks wrapped in <hunk> tags for a reviewing agent."""
    try:
        parsed = load_hunks(diff)
    except (HunkError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(hunks_to_context_xml(parsed.hunks))


def coverage_command(
    ctx: typer.Context,
    review_file: Path = typer.Argument(..., help="Review YAML written by the reviewer"),
    diff: str = typer.Argument("-", help="Diff file to read ('-' for stdin)"),
    stable_ids: bool = typer.Option(
        False,
        "--stable-ids",
        help="Review groups reference stable hunk IDs instead of numeric IDs",
    ),
) -> None:
    """Report which hunk lines the review has not explained yet.

    Exits with 0 when every hunk is covered and 2 when something remains.
    """
    settings = get_settings(ctx)
    try:
        parsed = load_hunks(diff)
    except (HunkError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    document, warnings = read_review_yaml(review_file)
    for warning in warnings:
        typer.echo(f"Warning: {warning}", err=True)
    if document is None:
        typer.echo(f"Review file {review_file} is missing or not valid YAML yet.", err=True)
        raise typer.Exit(1)

    key = hunk_to_stable_id if stable_ids else None
    hunk_map = create_hunk_map(parsed.hunks, key)
    coverage = initialize_coverage(parsed.hunks, key=key)
    for group in document.hunks:
        for warning in update_coverage_from_group(hunk_map, coverage, group):
            typer.echo(f"Warning: {warning}", err=True)

    portions = get_uncovered_portions(
        hunk_map, coverage, settings.preview_lines, settings.preview_width
    )
    typer.echo(format_uncovered_message(portions))
    typer.echo(
        f"\nCovered {coverage.fully_explained_hunks}/{coverage.total_hunks} hunks fully, "
        f"{coverage.partially_explained_hunks} partially."
    )
    if portions:
        raise typer.Exit(2)
