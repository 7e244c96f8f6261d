"""Hunk-related exception classes.

Contains all exception classes for hunk operations:
- HunkError: Base exception for hunk-related errors
- ParseError: Raised when a unified diff cannot be parsed
- InvalidHunkId: Raised when a stable hunk ID is malformed
- RangeError: Raised when line indexes are out of bounds or inverted
- CombineConflict: Raised when hunks cannot be combined into one patch
- UnknownHunkError: Raised when coverage is requested for an untracked hunk
- NoHunksError: Raised when a command has no hunks to act on
"""

from typing import Optional


class HunkError(Exception):
    """Base exception for hunk-related errors."""

    pass


class ParseError(HunkError):
    """Raised when a unified diff cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class InvalidHunkId(HunkError):
    """Raised when a stable hunk ID does not match the expected format."""

    pass


class RangeError(HunkError):
    """Raised when line indexes are out of bounds or inverted."""

    pass


class CombineConflict(HunkError):
    """Raised when hunks cannot be combined into a single patch."""

    pass


class UnknownHunkError(HunkError):
    """Raised when a coverage operation references an untracked hunk."""

    pass


class NoHunksError(HunkError):
    """Raised when the input diff contains no hunks to act on."""

    pass
