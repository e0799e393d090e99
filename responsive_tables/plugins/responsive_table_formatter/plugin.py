# responsive_tables/plugins/responsive_table_formatter/plugin.py
"""Responsive table formatter plugin.

Detects markdown tables in model output and, when a table is wider than
the terminal, rewrites it as stacked ``**header**: value`` cards so it
stays readable. Tables that fit, and everything inside code fences, pass
through untouched.

Streaming strategy: text is split into complete lines. Lines that cannot
be part of a table are yielded immediately; runs of table-shaped lines are
held until the first line after them (or flush()) and then emitted as a
unit, reflowed or verbatim.

Formatting never blocks output: any unexpected error while handling a
table (or a whole text in format_text()) is traced and the original text
is emitted instead.

Usage (pipeline):
    from responsive_tables.plugins.formatter_pipeline import create_pipeline
    from responsive_tables.plugins.responsive_table_formatter import create_plugin

    pipeline = create_pipeline()
    pipeline.register(create_plugin())  # priority 25

Usage (complete text):
    plugin = create_plugin()
    plugin.set_console_width(80)
    text = plugin.format_text(text)
"""

import os
from typing import Any, Dict, Iterator, List, Optional

from responsive_tables.terminal_width import DEFAULT_MARGIN, get_max_width, get_terminal_columns
from responsive_tables.trace import trace

from .display_width import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_MAX_OPERATIONS, WidthCache
from .formatter import format_block, format_responsive_tables
from .scanner import CandidateBlock, Segment, TableScanner

# Priority for pipeline ordering (20-39 = structural formatting)
DEFAULT_PRIORITY = 25


def _trace(msg: str, include_traceback: bool = False) -> None:
    """Write trace message to log file for debugging."""
    trace("RESPONSIVE_TABLES", msg, include_traceback=include_traceback)


class ResponsiveTableFormatterPlugin:
    """Plugin that stacks tables too wide for the terminal.

    Implements the FormatterPlugin protocol for use in a formatter pipeline.

    Width handling:
    - set_console_width(n) pins the terminal width to n columns
    - set_console_width(0) declares the width unknown (no stacking)
    - set_console_width(None) goes back to asking the attached terminal

    The available width is the terminal width minus a margin. It is
    resolved once per turn (first chunk after reset()) and once per
    format_text() call.
    """

    def __init__(self):
        self._priority = DEFAULT_PRIORITY
        self._console_width: Optional[int] = None
        self._width_margin = DEFAULT_MARGIN
        self._enabled = True
        self._cache = WidthCache()

        # Streaming state
        self._scanner = TableScanner()
        self._line_buffer: str = ""
        self._turn_max_width: Optional[int] = None
        self._turn_width_resolved = False

    # ==================== FormatterPlugin Protocol ====================

    @property
    def name(self) -> str:
        """Unique identifier for this formatter."""
        return "responsive_table_formatter"

    @property
    def priority(self) -> int:
        """Execution priority (25 = structural formatting)."""
        return self._priority

    @property
    def cache(self) -> WidthCache:
        """Width memo owned by this plugin."""
        return self._cache

    def process_chunk(self, chunk: str) -> Iterator[str]:
        """Process a chunk, holding back table lines until the table ends.

        Args:
            chunk: Incoming text chunk.

        Yields:
            Pass-through lines and completed (possibly stacked) tables.
        """
        if not self._enabled:
            yield chunk
            return

        text = self._line_buffer + chunk
        self._line_buffer = ""

        # Keep an incomplete trailing line for the next chunk
        if not text.endswith("\n"):
            last_newline = text.rfind("\n")
            if last_newline == -1:
                self._line_buffer = text
                return
            self._line_buffer = text[last_newline + 1:]
            text = text[:last_newline + 1]

        for line in text[:-1].split("\n"):
            yield from self._emit(self._scanner.feed(line))

    def flush(self) -> Iterator[str]:
        """Flush the incomplete last line and any held-back table."""
        tail = self._line_buffer
        self._line_buffer = ""

        if not self._enabled:
            if tail:
                yield tail
            return

        if tail:
            for segment in self._scanner.feed(tail):
                if isinstance(segment, CandidateBlock):
                    yield self._render_block(segment) + "\n"
                else:
                    # The tail line itself has no newline
                    yield segment

        for block in self._scanner.finish():
            rendered = self._render_block(block)
            # A table that ends the text keeps the text's missing final newline
            yield rendered if tail else rendered + "\n"

        self._cache.record_operation()

    def reset(self) -> None:
        """Reset streaming state for a new turn. The width cache is kept."""
        self._scanner.reset()
        self._line_buffer = ""
        self._turn_max_width = None
        self._turn_width_resolved = False

    # ==================== Formatting ====================

    def format_text(self, text: str) -> str:
        """Format a complete text in one call.

        This is the host-facing entry point: it never raises, and on any
        unexpected failure returns ``text`` unchanged.
        """
        if not self._enabled or not isinstance(text, str):
            return text
        try:
            return format_responsive_tables(text, self.get_max_width(), self._cache)
        except Exception as exc:
            _trace(f"format_text failed, passing text through: {exc}", include_traceback=True)
            return text

    def get_max_width(self) -> Optional[int]:
        """Available table width right now, or None when unknown."""
        columns = self._console_width
        if columns is None:
            columns = get_terminal_columns()
        return get_max_width(columns, self._width_margin)

    def _turn_width(self) -> Optional[int]:
        if not self._turn_width_resolved:
            self._turn_max_width = self.get_max_width()
            self._turn_width_resolved = True
            _trace(f"turn width resolved: {self._turn_max_width}")
        return self._turn_max_width

    def _emit(self, segments: List[Segment]) -> Iterator[str]:
        """Yield newline-terminated output for complete segments."""
        for segment in segments:
            if isinstance(segment, CandidateBlock):
                yield self._render_block(segment) + "\n"
            else:
                yield segment + "\n"

    def _render_block(self, block: CandidateBlock) -> str:
        return "\n".join(self._format_guarded(block))

    def _format_guarded(self, block: CandidateBlock) -> List[str]:
        """Format one block; on any failure return it verbatim."""
        try:
            return format_block(block, self._turn_width(), self._cache)
        except Exception as exc:
            _trace(f"format_block failed, passing table through: {exc}", include_traceback=True)
            return list(block.lines)

    # ==================== ConfigurableFormatter Protocol ====================

    def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the formatter with configuration.

        Args:
            config: Dict with optional settings:
                - priority: Pipeline priority (default: 25)
                - console_width: Terminal width (default: None, ask the terminal)
                - width_margin: Columns kept free (default: 10)
                - cache_max_entries: Width cache size limit (default: 1000)
                - cache_max_operations: Operations between cache resets (default: 100)
                - enabled: False turns the plugin into a pass-through
        """
        config = config or {}
        self._priority = config.get("priority", DEFAULT_PRIORITY)
        self._console_width = config.get("console_width")
        self._width_margin = config.get("width_margin", DEFAULT_MARGIN)
        self._enabled = config.get("enabled", True)
        self._cache = WidthCache(
            max_entries=config.get("cache_max_entries", DEFAULT_CACHE_MAX_ENTRIES),
            max_operations=config.get("cache_max_operations", DEFAULT_CACHE_MAX_OPERATIONS),
        )

        # Check env vars
        env_margin = os.environ.get("RESPONSIVE_TABLES_MARGIN")
        if env_margin and "width_margin" not in config:
            try:
                self._width_margin = int(env_margin)
            except ValueError:
                _trace(f"ignoring invalid RESPONSIVE_TABLES_MARGIN={env_margin!r}")

        env_disabled = os.environ.get("RESPONSIVE_TABLES_DISABLED", "").lower()
        if env_disabled in ("1", "true", "yes"):
            self._enabled = False

        self._turn_width_resolved = False

    def set_console_width(self, width: Optional[int]) -> None:
        """Update console width for rendering.

        Args:
            width: Terminal width in columns, 0 for unknown, None to detect.
        """
        self._console_width = width
        self._turn_width_resolved = False

    def shutdown(self) -> None:
        """Cleanup when plugin is disabled."""
        self._cache.reset()


def create_plugin() -> ResponsiveTableFormatterPlugin:
    """Factory function to create a ResponsiveTableFormatterPlugin instance."""
    return ResponsiveTableFormatterPlugin()
