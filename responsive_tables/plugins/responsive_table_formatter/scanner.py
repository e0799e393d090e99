# responsive_tables/plugins/responsive_table_formatter/scanner.py
"""Detection of markdown table blocks outside code fences.

A table row candidate is a line that, trimmed, starts and ends with ``|``
and has at least one interior ``|``. Consecutive candidates form one
candidate block. Lines between a pair of fence markers (three or more
backticks or tildes at the start of the line) are never candidates.

A block is a valid table when it has at least two lines, every line has
the same non-zero number of cells, and at least one line is a separator
row (| --- | :---: | ---: |).
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Union

# Fence opener/closer: ``` or ~~~ (or longer), optionally indented.
# Either flavour toggles the same state.
CODE_FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")

# One cell of a separator row: optional colons around one or more dashes
SEPARATOR_CELL_PATTERN = re.compile(r"^\s*:?-+:?\s*$")


def is_code_fence_line(line: str) -> bool:
    """Check whether a line opens or closes a fenced code block."""
    return bool(CODE_FENCE_PATTERN.match(line))


def is_table_row(line: str) -> bool:
    """Check whether a line has the shape of a pipe table row."""
    stripped = line.strip()
    return stripped.startswith("|") and stripped.endswith("|") and len(stripped.split("|")) > 2


def is_separator_row(line: str) -> bool:
    """Check whether a line is a header/body separator row."""
    stripped = line.strip()
    if not stripped.startswith("|") or not stripped.endswith("|"):
        return False
    cells = stripped.split("|")[1:-1]
    return len(cells) > 0 and all(SEPARATOR_CELL_PATTERN.match(cell) for cell in cells)


def split_cells(line: str) -> List[str]:
    """Split a table row into trimmed cells, dropping the outer empty fields."""
    return [cell.strip() for cell in line.split("|")[1:-1]]


def is_valid_table(lines: List[str]) -> bool:
    """Check whether a candidate block is a structurally consistent table."""
    if len(lines) < 2:
        return False

    rows = [split_cells(line) for line in lines]
    column_count = len(rows[0])
    if column_count == 0:
        return False
    if any(len(row) != column_count for row in rows):
        return False

    return any(is_separator_row(line) for line in lines)


@dataclass
class CandidateBlock:
    """A maximal run of consecutive table row candidates."""

    lines: List[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return is_valid_table(self.lines)


Segment = Union[str, CandidateBlock]


class TableScanner:
    """Line-at-a-time scanner that groups table rows into candidate blocks.

    Lines are fed one at a time; the scanner yields plain lines (to be
    passed through) and CandidateBlock instances (to be validated and
    possibly reflowed) in document order. A block is only yielded once the
    line after it, or the end of input, shows that it is complete.
    """

    def __init__(self):
        self._in_code_fence = False
        self._run: List[str] = []

    @property
    def in_code_fence(self) -> bool:
        return self._in_code_fence

    @property
    def pending(self) -> List[str]:
        """Rows collected for the block that is still open."""
        return list(self._run)

    def feed(self, line: str) -> List[Segment]:
        """Consume one line (without its newline).

        Returns:
            Segments completed by this line: nothing while a block is
            growing, otherwise the finished block (if any) and the line.
        """
        # Fence lines never look like rows, so a run cannot span a fence
        if not self._in_code_fence and is_table_row(line):
            self._run.append(line)
            return []

        segments = self.finish()
        if is_code_fence_line(line):
            self._in_code_fence = not self._in_code_fence
        segments.append(line)
        return segments

    def finish(self) -> List[Segment]:
        """Close the open block, if any. Fence state is kept."""
        if not self._run:
            return []
        block = CandidateBlock(self._run)
        self._run = []
        return [block]

    def reset(self) -> None:
        """Forget fence state and any open block."""
        self._in_code_fence = False
        self._run = []


def scan_document(lines: Iterable[str]) -> Iterator[Segment]:
    """Split a whole document into pass-through lines and candidate blocks."""
    scanner = TableScanner()
    for line in lines:
        yield from scanner.feed(line)
    yield from scanner.finish()
