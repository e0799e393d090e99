# responsive_tables/plugins/formatter_pipeline/protocol.py
"""Interfaces a formatter implements to join a FormatterPipeline.

A formatter sees the reply as a series of chunks. For each chunk it may
emit text straight away, emit nothing and keep the text for later, or emit
a rewritten version once it has seen enough (a whole table, for the
responsive table formatter). Anything still held at the end of the reply
is released by flush().
"""

from typing import Iterator, Optional, Protocol, runtime_checkable


@runtime_checkable
class FormatterPlugin(Protocol):
    """A pipeline stage."""

    @property
    def name(self) -> str:
        """Identifier of the stage."""
        ...

    @property
    def priority(self) -> int:
        """Position in the pipeline; lower runs first.

        Structural rewrites such as table reflow use 20-39.
        """
        ...

    def process_chunk(self, chunk: str) -> Iterator[str]:
        """Consume one chunk and yield zero or more output chunks."""
        ...

    def flush(self) -> Iterator[str]:
        """Yield whatever is still held at the end of the reply."""
        ...

    def reset(self) -> None:
        """Drop per-reply state before the next reply."""
        ...


@runtime_checkable
class ConfigurableFormatter(FormatterPlugin, Protocol):
    """A stage that takes settings and renders for a terminal width."""

    def initialize(self, config: dict) -> None:
        """Apply a settings dict; unknown keys are ignored."""
        ...

    def set_console_width(self, width: Optional[int]) -> None:
        """Render for ``width`` columns; None when the width is not known."""
        ...
