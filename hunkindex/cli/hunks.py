"""CLI commands for listing, showing, splitting and combining hunks."""

import typer

from hunkindex.review import (
    HunkError,
    combine_hunk_patches,
    create_sub_hunk,
    format_hunk_listing,
)
from hunkindex.cli.utils import get_settings, load_hunks, require_hunk


def list_command(
    ctx: typer.Context,
    diff: str = typer.Argument("-", help="Diff file to read ('-' for stdin)"),
) -> None:
    """List hunks with their stable IDs."""
    settings = get_settings(ctx)
    try:
        parsed = load_hunks(diff)
    except (HunkError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(format_hunk_listing(parsed.hunks, settings.snippet_lines))
    typer.echo("")
    typer.echo(f"{len(parsed.hunks)} hunk(s)")


def show_command(
    stable_id: str = typer.Argument(..., help="Stable hunk ID (file:@-old,len+new,len)"),
    diff: str = typer.Argument("-", help="Diff file to read ('-' for stdin)"),
) -> None:
    """Print the patch of a single hunk."""
    try:
        parsed = load_hunks(diff)
    except (HunkError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    hunk = require_hunk(parsed.hunks, stable_id)
    typer.echo(hunk.raw_diff, nl=False)


def split_command(
    stable_id: str = typer.Argument(..., help="Stable hunk ID (file:@-old,len+new,len)"),
    start: int = typer.Argument(..., help="First body line to include (0-based)"),
    end: int = typer.Argument(..., help="Body line to stop before (0-based, exclusive)"),
    diff: str = typer.Argument("-", help="Diff file to read ('-' for stdin)"),
) -> None:
    """Print the patch of a line range of one hunk."""
    try:
        parsed = load_hunks(diff)
        hunk = require_hunk(parsed.hunks, stable_id)
        sub_hunk = create_sub_hunk(hunk, start, end)
    except (HunkError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(sub_hunk.raw_diff, nl=False)


def combine_command(
    stable_ids: list[str] = typer.Argument(..., help="Stable IDs of hunks from one file"),
    diff: str = typer.Option("-", "--diff", help="Diff file to read ('-' for stdin)"),
) -> None:
    """Print one patch combining several hunks of the same file."""
    try:
        parsed = load_hunks(diff)
        hunks = [require_hunk(parsed.hunks, stable_id) for stable_id in stable_ids]
        patch = combine_hunk_patches(hunks)
    except (HunkError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(patch, nl=False)
