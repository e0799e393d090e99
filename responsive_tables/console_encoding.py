"""Console encoding setup for printing box-drawing output.

Stacked tables are separated by "─" rules, which Windows consoles using a
legacy code page (cp1252, cp437 variants) cannot always encode.
"""

import sys


def configure_utf8_output() -> None:
    """Switch stdout and stderr to UTF-8 with replacement on Windows.

    Unencodable characters become "?" instead of raising
    UnicodeEncodeError. Does nothing on other platforms or when the
    streams cannot be reconfigured (e.g. replaced by test captures).
    """
    if sys.platform != "win32":
        return

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is None:
            continue
        try:
            reconfigure(encoding="utf-8", errors="replace")
        except (ValueError, OSError):
            # Stream already written to in binary mode or detached
            pass
