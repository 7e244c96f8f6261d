"""CLI entry point for hunkindex.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from hunkindex.cli.hunks import (
    combine_command,
    list_command,
    show_command,
    split_command,
)
from hunkindex.cli.review import context_command, coverage_command
from hunkindex.cli.main import main_callback

# Main application
app = typer.Typer(
    name="hunkindex",
    help="hunkindex: stable hunk IDs and review coverage for unified diffs",
    add_completion=False,
)

app.command("list")(list_command)
app.command("show")(show_command)
app.command("split")(split_command)
app.command("combine")(combine_command)
app.command("context")(context_command)
app.command("coverage")(coverage_command)

app.callback(invoke_without_command=True)(main_callback)


__all__ = [
    "app",
    "list_command",
    "show_command",
    "split_command",
    "combine_command",
    "context_command",
    "coverage_command",
    "main_callback",
]
