"""Trace file for diagnosing formatting problems.

Formatting runs while text is being shown in a terminal, so diagnostics
go to a file instead of the screen. The file is chosen by
RESPONSIVE_TABLES_TRACE_LOG:

- a path: entries are appended there
- "" (empty): tracing is off
- unset: responsive_tables_trace.log in the system temp directory

Usage:
    from responsive_tables.trace import trace

    trace("RESPONSIVE_TABLES", "turn width resolved: 70")
    trace("RESPONSIVE_TABLES", "format_block failed", include_traceback=True)
"""

import os
import sys
import tempfile
import traceback
from datetime import datetime
from typing import Optional, Set

TRACE_ENV_VAR = "RESPONSIVE_TABLES_TRACE_LOG"
DEFAULT_TRACE_FILENAME = "responsive_tables_trace.log"

# Parent directories created so far in this process
_created_dirs: Set[str] = set()


def trace_path() -> Optional[str]:
    """Return the trace file for this process, or None when tracing is off."""
    configured = os.environ.get(TRACE_ENV_VAR)
    if configured is None:
        return os.path.join(tempfile.gettempdir(), DEFAULT_TRACE_FILENAME)
    return configured or None


def trace(component: str, msg: str, *, include_traceback: bool = False) -> None:
    """Append one entry to the trace file.

    Entries read ``[14:02:07.391] [RESPONSIVE_TABLES] message``. With
    ``include_traceback`` the exception currently being handled, if any,
    follows on its own lines. A trace file that cannot be written is
    ignored.

    Args:
        component: Tag identifying the writer.
        msg: Message text.
        include_traceback: Append the traceback of the active exception.
    """
    path = trace_path()
    if path is None:
        return

    stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    entry = f"[{stamp}] [{component}] {msg}\n"
    if include_traceback and sys.exc_info()[0] is not None:
        entry += f"[{stamp}] [{component}] Traceback:\n{traceback.format_exc()}\n"

    try:
        directory = os.path.dirname(os.path.abspath(path))
        if directory not in _created_dirs:
            os.makedirs(directory, exist_ok=True)
            _created_dirs.add(directory)
        with open(path, "a", encoding="utf-8") as f:
            f.write(entry)
    except OSError:
        pass
