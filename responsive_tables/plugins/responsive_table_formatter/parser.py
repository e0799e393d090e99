# responsive_tables/plugins/responsive_table_formatter/parser.py
"""Parsing of validated markdown table blocks."""

from dataclasses import dataclass, field
from typing import List

from .scanner import is_separator_row, split_cells


@dataclass
class ParsedTable:
    """Header cells and data rows of a markdown table.

    The separator row is not kept. Every row of a validated block has as
    many cells as the header.
    """

    headers: List[str] = field(default_factory=list)
    data_rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.headers)


def parse_table(lines: List[str]) -> ParsedTable:
    """Parse a block that already passed is_valid_table().

    Separator rows are skipped wherever they appear. The first remaining
    row is the header and every later one is a data row, in document order.

    Args:
        lines: Raw lines of the table block.

    Returns:
        The parsed table.
    """
    table = ParsedTable()
    header_found = False

    for line in lines:
        if is_separator_row(line):
            continue
        cells = split_cells(line)
        if not header_found:
            table.headers = cells
            header_found = True
        else:
            table.data_rows.append(cells)

    return table
