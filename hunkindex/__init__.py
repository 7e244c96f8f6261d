"""Stable hunk addressing and review coverage for unified diffs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("hunkindex")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
