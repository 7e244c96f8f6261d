"""Main CLI callback: logging and configuration for every command."""

import logging
from pathlib import Path
from typing import Optional

import typer

from hunkindex import __version__
from hunkindex.config import ConfigError, load_settings


def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Config file to use instead of ~/.hunkindex/config.yaml",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
) -> None:
    """Address diff hunks by stable ID and track review coverage."""
    if version:
        typer.echo(f"hunkindex {__version__}")
        raise typer.Exit(0)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        ctx.obj = load_settings(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
