# responsive_tables/plugins/responsive_table_formatter/display_width.py
"""Rendered display width of markdown lines.

A markdown renderer hides part of the syntax it displays: ``**bold**``
occupies four columns, not eight. Table fitting therefore measures lines
under "concealment" semantics:

- ``code`` spans count their literal content (backticks hidden, anything
  inside shown as-is, including markdown look-alikes)
- ***bold italic***, **bold**, *italic* and ~~strike~~ count their text only
- ![alt](url) counts the alt text only
- [text](url) counts as "text (url)"

Column counting itself is delegated to wcwidth, so wide (CJK, emoji) and
zero-width (combining, joiners) characters are measured the way a terminal
draws them.

Usage:
    from responsive_tables.plugins.responsive_table_formatter.display_width import (
        WidthCache, measure,
    )

    cache = WidthCache()
    measure("| **Name** | `a|b` |", cache)
"""

import os
import re
import threading
import unicodedata
from typing import Dict, List, Optional, Tuple

import wcwidth

# Generational reset thresholds for WidthCache
DEFAULT_CACHE_MAX_ENTRIES = 1000
DEFAULT_CACHE_MAX_OPERATIONS = 100

# Inline code span: single backticks, shortest match, non-empty content
CODE_SPAN_PATTERN = re.compile(r"`(.+?)`")

# Code spans are parked behind a sentinel taken from here, skipping any
# character the line already contains (private use area first)
_SENTINEL_START = 0xE000
_SENTINEL_END = 0x110000

# Longest marker first so *** is never read as ** followed by *
EMPHASIS_MARKERS = ("***", "**", "*", "~~")
_MARKER_CHARS = frozenset("*~[!")


def _get_ambiguous_width() -> int:
    """Width for East Asian Ambiguous characters (1, or 2 on CJK terminals).

    Read from RESPONSIVE_TABLES_AMBIGUOUS_WIDTH.
    """
    value = os.environ.get("RESPONSIVE_TABLES_AMBIGUOUS_WIDTH", "1")
    return 2 if value.strip() == "2" else 1


def columns(text: str, ambiguous_width: Optional[int] = None) -> int:
    """Calculate the number of terminal columns a string occupies.

    Uses wcwidth to find zero-width and non-printable characters, and
    unicodedata.east_asian_width() for the rest:
    - Fullwidth (F) and Wide (W) characters: 2 columns
    - Ambiguous (A) characters: configurable via RESPONSIVE_TABLES_AMBIGUOUS_WIDTH
    - Halfwidth (H), Narrow (Na), Neutral (N): 1 column
    - Zero-width and non-printable characters: 0 columns

    Args:
        text: The string to measure.
        ambiguous_width: Width of Ambiguous characters; read from the
            environment when None.

    Returns:
        The display width in terminal columns.
    """
    if ambiguous_width is None:
        ambiguous_width = _get_ambiguous_width()
    width = 0
    for char in text:
        wc = wcwidth.wcwidth(char)
        if wc <= 0:
            continue

        eaw = unicodedata.east_asian_width(char)
        if wc == 2 or eaw in ("F", "W"):
            width += 2
        elif eaw == "A":
            width += ambiguous_width
        else:
            width += 1
    return width


# ==================== Concealment ====================


def _match_emphasis(text: str, start: int) -> Optional[Tuple[str, int]]:
    """Match an emphasis span opening at ``start``.

    Returns:
        (inner text, index after the closing marker) or None.
    """
    for marker in EMPHASIS_MARKERS:
        if not text.startswith(marker, start):
            continue
        inner_start = start + len(marker)
        # Closing marker needs at least one character of content before it
        close = text.find(marker, inner_start + 1)
        if close != -1:
            return text[inner_start:close], close + len(marker)
    return None


def _match_link(text: str, start: int, allow_empty_label: bool) -> Optional[Tuple[str, str, int]]:
    """Match ``[label](url)`` with the opening bracket at ``start``.

    Returns:
        (label, url, index after the closing parenthesis) or None.
    """
    close_bracket = text.find("]", start + 1)
    if close_bracket == -1:
        return None
    if close_bracket == start + 1 and not allow_empty_label:
        return None
    if not text.startswith("(", close_bracket + 1):
        return None
    url_start = close_bracket + 2
    close_paren = text.find(")", url_start)
    if close_paren == -1 or close_paren == url_start:
        return None
    return text[start + 1:close_bracket], text[url_start:close_paren], close_paren + 1


def _conceal_once(text: str) -> str:
    """Rewrite every outermost concealable construct in one left-to-right scan."""
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        char = text[i]
        if char in ("*", "~"):
            emphasis = _match_emphasis(text, i)
            if emphasis:
                out.append(emphasis[0])
                i = emphasis[1]
                continue
        elif char == "!" and text.startswith("[", i + 1):
            image = _match_link(text, i + 1, allow_empty_label=True)
            if image:
                out.append(image[0])
                i = image[2]
                continue
        elif char == "[":
            link = _match_link(text, i, allow_empty_label=False)
            if link:
                out.append(f"{link[0]} ({link[1]})")
                i = link[2]
                continue
        out.append(char)
        i += 1
    return "".join(out)


def conceal(text: str) -> str:
    """Strip the markdown syntax a renderer hides, to a fixed point.

    Each rewriting pass that changes the text makes it strictly shorter,
    so the loop ends after at most len(text) passes (in practice after as
    many passes as emphasis is nested deep). Unterminated markers never
    match and stay in the text.
    """
    previous = None
    while text != previous and _MARKER_CHARS.intersection(text):
        previous = text
        text = _conceal_once(text)
    return text


def _pick_sentinel(line: str) -> Optional[str]:
    """Return a character that does not occur in ``line``, or None."""
    present = set(line)
    for code in range(_SENTINEL_START, _SENTINEL_END):
        char = chr(code)
        if char not in present:
            return char
    return None


def visible_text(line: str) -> str:
    """Return the text a concealing markdown renderer shows for ``line``.

    Code spans are set aside before concealment and restored verbatim
    afterwards, so ``**`` inside backticks is shown and counted. While set
    aside each span is replaced by its index wrapped in a sentinel character
    absent from the line, so nothing in the input can be mistaken for one.
    """
    if "`" not in line:
        return conceal(line)

    sentinel = _pick_sentinel(line)
    if sentinel is None:
        # Every candidate occurs in the line: drop the backticks and conceal it all
        return conceal(CODE_SPAN_PATTERN.sub(r"\1", line))

    code_spans: List[str] = []

    def _stash(match: "re.Match[str]") -> str:
        code_spans.append(match.group(1))
        return f"{sentinel}{len(code_spans) - 1}{sentinel}"

    text = conceal(CODE_SPAN_PATTERN.sub(_stash, line))
    if not code_spans:
        return text

    # Concealment never removes a sentinel or digit, so odd parts are span indexes
    parts = text.split(sentinel)
    for i in range(1, len(parts), 2):
        parts[i] = code_spans[int(parts[i])]
    return "".join(parts)


# ==================== Cache ====================


class WidthCache:
    """Memo of measured line widths with a generational reset.

    Entries are keyed by the raw line and hold the final width. The whole
    map is dropped when adding a line would take it past ``max_entries``,
    and once more than ``max_operations`` formatting operations have been
    recorded. All access goes through a lock so one cache can be shared
    between threads.

    The Ambiguous character width is read from the environment once, when
    the cache is created, and every width stored here is measured with it.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        max_operations: int = DEFAULT_CACHE_MAX_OPERATIONS,
    ):
        self._max_entries = max_entries
        self._max_operations = max_operations
        self._ambiguous_width = _get_ambiguous_width()
        self._entries: Dict[str, int] = {}
        self._operations = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, line: str) -> bool:
        return line in self._entries

    @property
    def ambiguous_width(self) -> int:
        """Columns counted for East Asian Ambiguous characters."""
        return self._ambiguous_width

    @property
    def operations(self) -> int:
        """Formatting operations recorded since the last reset."""
        return self._operations

    def get(self, line: str) -> Optional[int]:
        with self._lock:
            return self._entries.get(line)

    def set(self, line: str, width: int) -> None:
        with self._lock:
            if line not in self._entries and len(self._entries) >= self._max_entries:
                self._entries = {}
            self._entries[line] = width

    def record_operation(self) -> bool:
        """Count one formatting operation, resetting when the limit is passed.

        Returns:
            True if the cache was reset.
        """
        with self._lock:
            self._operations += 1
            if self._operations > self._max_operations:
                self._entries = {}
                self._operations = 0
                return True
            return False

    def reset(self) -> None:
        """Drop every entry and the operation count."""
        with self._lock:
            self._entries = {}
            self._operations = 0


def measure(line: str, cache: Optional[WidthCache] = None) -> int:
    """Return the rendered display width of a line.

    Args:
        line: A single line of markdown.
        cache: Optional memo; looked up and filled with the final width.
            Its Ambiguous width setting is used for the measurement.

    Returns:
        Width in terminal columns under concealment semantics.
    """
    if cache is None:
        return columns(visible_text(line))

    cached = cache.get(line)
    if cached is not None:
        return cached

    width = columns(visible_text(line), cache.ambiguous_width)
    cache.set(line, width)
    return width
