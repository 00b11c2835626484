"""Shared helpers for user-facing error and warning reporting."""

from __future__ import annotations

import sys

from cerus.core.output import colorize


def print_error(message: str) -> None:
    """Print a user-facing error message to stderr in a consistent format."""
    print(colorize(f"  Error: {message}", "red"), file=sys.stderr)


def warn_best_effort(message: str) -> None:
    """Emit a consistent user-facing warning for non-fatal fallback failures."""
    print(colorize(f"  WARNING: {message}", "yellow"), file=sys.stderr)


__all__ = [
    "print_error",
    "warn_best_effort",
]
