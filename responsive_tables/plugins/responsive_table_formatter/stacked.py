# responsive_tables/plugins/responsive_table_formatter/stacked.py
"""Reflow of tables too wide for the terminal into stacked cards.

A table whose widest rendered line exceeds the available width is
rewritten as one card per data row:

    **Name**: Alice
    **Email**: alice@example.com
    ────────────────────────
    **Name**: Bob
    **Email**: bob@example.com

Cards are separated by a horizontal rule as wide as the widest card line,
capped at the available width. Tables that fit, tables without data rows,
and all tables when the width is unknown are returned unchanged.
"""

import logging
from typing import List, Optional

from .display_width import WidthCache, measure
from .parser import ParsedTable

logger = logging.getLogger(__name__)

# Box-drawing horizontal line used for the rule between cards
RULE_CHAR = "─"


def table_display_width(lines: List[str], cache: Optional[WidthCache] = None) -> int:
    """Widest rendered line of a table block, separator row included."""
    return max((measure(line, cache) for line in lines), default=0)


def should_stack(
    table: ParsedTable,
    raw_lines: List[str],
    max_width: Optional[int],
    cache: Optional[WidthCache] = None,
) -> bool:
    """Decide whether a table needs to be reflowed into cards."""
    if max_width is None or not table.data_rows:
        return False
    return table_display_width(raw_lines, cache) > max_width


def format_stacked(table: ParsedTable, max_width: int, cache: Optional[WidthCache] = None) -> List[str]:
    """Render every data row as a card of ``**header**: value`` lines.

    Args:
        table: Parsed table with at least one data row.
        max_width: Available width; caps the rule length.
        cache: Optional width memo.

    Returns:
        Output lines, one rule line between consecutive cards.
    """
    headers = table.headers
    cards: List[List[str]] = []
    max_line_width = 0

    for row in table.data_rows:
        card = []
        for col, header in enumerate(headers):
            # Short rows are tolerated: missing cells render as empty values
            value = row[col] if col < len(row) else ""
            card.append(f"**{header}**: {value}")
            max_line_width = max(max_line_width, measure(header, cache) + 2 + measure(value, cache))
        cards.append(card)

    rule = RULE_CHAR * min(max_line_width, max_width)
    result: List[str] = []
    for i, card in enumerate(cards):
        if i > 0:
            result.append(rule)
        result.extend(card)
    return result


def reflow(
    table: ParsedTable,
    raw_lines: List[str],
    max_width: Optional[int],
    cache: Optional[WidthCache] = None,
) -> List[str]:
    """Return the lines to emit for a validated table block.

    Args:
        table: The parsed table.
        raw_lines: The block exactly as written.
        max_width: Available width, or None when unknown (never stack).
        cache: Optional width memo.

    Returns:
        ``raw_lines`` unchanged when the table fits, otherwise stacked cards.
    """
    if not should_stack(table, raw_lines, max_width, cache):
        return list(raw_lines)
    logger.debug(
        "Stacking %d row(s) x %d column(s) for width %s",
        len(table.data_rows), table.column_count, max_width,
    )
    return format_stacked(table, max_width, cache)
