"""Terminal width detection.

Provides the column count of the terminal the formatted text will be shown
on, and the derived maximum table width. Unlike ``shutil.get_terminal_size``
there is no 80 column fallback: when no terminal is attached (web clients,
pipes, captured output) the width is reported as unknown so that every
table passes through unchanged.

Usage:
    from responsive_tables.terminal_width import get_max_width, get_terminal_columns

    max_width = get_max_width(get_terminal_columns())  # None when unknown
"""

import os
import sys
from typing import Optional

# Columns kept free on the right so stacked output never touches the edge.
DEFAULT_MARGIN = 10


def get_terminal_columns() -> Optional[int]:
    """Return the terminal column count, or None when it cannot be known.

    A positive integer in the COLUMNS environment variable wins, matching
    the shell convention; otherwise the terminal attached to stdout is
    queried.
    """
    env_columns = os.environ.get("COLUMNS")
    if env_columns:
        try:
            columns = int(env_columns)
        except ValueError:
            columns = 0
        if columns > 0:
            return columns

    try:
        columns = os.get_terminal_size(sys.stdout.fileno()).columns
    except (AttributeError, ValueError, OSError):
        # No real stdout (replaced stream, closed fd, not a tty)
        return None
    return columns if columns > 0 else None


def get_max_width(columns: Optional[int], margin: int = DEFAULT_MARGIN) -> Optional[int]:
    """Derive the available table width from a terminal column count.

    Args:
        columns: Terminal columns, or None if unknown.
        margin: Columns to keep free.

    Returns:
        Width available to a table (at least 1), or None for unbounded.
    """
    if not columns:
        return None
    return max(1, columns - margin)
