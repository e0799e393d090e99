# responsive_tables/plugins/formatter_pipeline/pipeline.py
"""Chain of formatters that streamed model output passes through.

A host feeds every chunk of a reply into the pipeline and shows whatever
comes out. Stages run in ascending priority order; a stage may hold text
back (the responsive table formatter holds table rows until the table is
complete) and release it on flush(), after which it still passes through
the stages behind it.

Usage:
    from responsive_tables.plugins.formatter_pipeline import create_default_pipeline

    pipeline = create_default_pipeline(console_width=100)
    for chunk in reply_stream:
        for text in pipeline.process_chunk(chunk):
            show(text)
    for text in pipeline.flush():
        show(text)
    pipeline.reset()
"""

from typing import Iterable, Iterator, List, Optional

from responsive_tables.trace import trace

from .protocol import ConfigurableFormatter, FormatterPlugin


def _run_stages(stages: List[FormatterPlugin], chunks: Iterable[str]) -> Iterator[str]:
    """Pass ``chunks`` through ``stages`` in order and yield the final output."""
    for stage in stages:
        chunks = [out for chunk in chunks for out in stage.process_chunk(chunk)]
    yield from chunks


class FormatterPipeline:
    """Ordered formatter stages plus the console width they render for.

    Stages with equal priority keep their registration order. A width of
    None means the pipeline does not know the terminal; stages are then
    left to find it themselves.
    """

    def __init__(self):
        self._stages: List[FormatterPlugin] = []
        self._console_width: Optional[int] = None

    @property
    def stage_names(self) -> List[str]:
        """Names of the registered formatters, first stage first."""
        return [stage.name for stage in self._stages]

    def register(self, formatter: FormatterPlugin) -> None:
        """Add a formatter at the position its priority calls for."""
        position = next(
            (i for i, stage in enumerate(self._stages) if formatter.priority < stage.priority),
            len(self._stages),
        )
        self._stages.insert(position, formatter)
        if self._console_width is not None:
            self._push_width(formatter)
        trace("FormatterPipeline", f"registered {formatter.name} as stage {position + 1} of {len(self._stages)}")

    def set_console_width(self, width: Optional[int]) -> None:
        """Record the terminal width and hand it to every stage that renders."""
        self._console_width = width
        for stage in self._stages:
            self._push_width(stage)

    def _push_width(self, stage: FormatterPlugin) -> None:
        if isinstance(stage, ConfigurableFormatter):
            stage.set_console_width(self._console_width)

    def process_chunk(self, chunk: str) -> Iterator[str]:
        """Feed one chunk of the reply and yield whatever is ready to show."""
        yield from _run_stages(self._stages, [chunk])

    def flush(self) -> Iterator[str]:
        """Release held-back text at the end of a reply.

        Each stage is flushed in order, and what it releases runs through
        the stages after it before the next stage is flushed.
        """
        for i, stage in enumerate(self._stages):
            yield from _run_stages(self._stages[i + 1:], stage.flush())

    def reset(self) -> None:
        """Forget per-reply state in every stage."""
        for stage in self._stages:
            stage.reset()

    def format(self, text: str) -> str:
        """Run a complete reply through the pipeline as a single chunk."""
        self.reset()
        pieces = list(self.process_chunk(text))
        pieces.extend(self.flush())
        return "".join(pieces)


def create_pipeline() -> FormatterPipeline:
    """Create an empty pipeline."""
    return FormatterPipeline()


def create_default_pipeline(console_width: Optional[int] = None) -> FormatterPipeline:
    """Create a pipeline with the responsive table formatter registered.

    Args:
        console_width: Terminal width; None lets the formatter detect it.

    Returns:
        Ready-to-use FormatterPipeline.
    """
    from responsive_tables.plugins.responsive_table_formatter import create_plugin

    plugin = create_plugin()
    plugin.initialize({"console_width": console_width})

    pipeline = create_pipeline()
    pipeline.register(plugin)
    pipeline.set_console_width(console_width)
    return pipeline
