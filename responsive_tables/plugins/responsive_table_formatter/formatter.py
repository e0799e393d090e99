# responsive_tables/plugins/responsive_table_formatter/formatter.py
"""Single-pass responsive table transform over a whole document.

Usage:
    from responsive_tables.plugins.responsive_table_formatter import (
        WidthCache, format_responsive_tables,
    )

    cache = WidthCache()
    text = format_responsive_tables(text, max_width=70, cache=cache)
"""

import logging
from typing import List, Optional

from .display_width import WidthCache
from .parser import parse_table
from .scanner import CandidateBlock, scan_document
from .stacked import reflow

logger = logging.getLogger(__name__)


def format_block(
    block: CandidateBlock,
    max_width: Optional[int],
    cache: Optional[WidthCache] = None,
) -> List[str]:
    """Validate, parse and reflow one candidate block.

    Invalid blocks come back unchanged, exactly as plain text would.
    """
    if not block.is_valid():
        logger.debug("Not a valid table, passing %d line(s) through", len(block.lines))
        return list(block.lines)

    return reflow(parse_table(block.lines), block.lines, max_width, cache)


def format_responsive_tables(
    text: str,
    max_width: Optional[int] = None,
    cache: Optional[WidthCache] = None,
) -> str:
    """Reflow every markdown table wider than ``max_width`` into cards.

    Args:
        text: The document.
        max_width: Available width in columns, or None when unknown (every
            table passes through).
        cache: Optional width memo shared between calls; one formatting
            operation is recorded on it per call.

    Returns:
        The transformed document. Identical to ``text`` when no table
        needed stacking.
    """
    output: List[str] = []
    for segment in scan_document(text.split("\n")):
        if isinstance(segment, CandidateBlock):
            output.extend(format_block(segment, max_width, cache))
        else:
            output.append(segment)

    if cache is not None:
        cache.record_operation()
    return "\n".join(output)
