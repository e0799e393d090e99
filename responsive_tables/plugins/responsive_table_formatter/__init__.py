# responsive_tables/plugins/responsive_table_formatter/__init__.py
"""Responsive table formatter plugin.

Rewrites markdown tables that are wider than the terminal as stacked
``**header**: value`` cards; narrower tables and code fences pass through.
"""

from .display_width import WidthCache, measure
from .formatter import format_block, format_responsive_tables
from .parser import ParsedTable, parse_table
from .plugin import ResponsiveTableFormatterPlugin, create_plugin
from .stacked import format_stacked, reflow

__all__ = [
    "ResponsiveTableFormatterPlugin",
    "create_plugin",
    "format_responsive_tables",
    "format_block",
    "WidthCache",
    "measure",
    "ParsedTable",
    "parse_table",
    "format_stacked",
    "reflow",
]
