# responsive_tables/plugins/formatter_pipeline/__init__.py
"""Priority-ordered chain of streaming formatters.

Example (streaming):
    from responsive_tables.plugins.formatter_pipeline import create_default_pipeline

    pipeline = create_default_pipeline(console_width=100)

    for chunk in reply_stream:
        for text in pipeline.process_chunk(chunk):
            show(text)

    for text in pipeline.flush():
        show(text)

    pipeline.reset()

Example (whole reply):
    formatted = pipeline.format(reply)
"""

from .protocol import FormatterPlugin, ConfigurableFormatter
from .pipeline import FormatterPipeline, create_pipeline, create_default_pipeline

__all__ = [
    "FormatterPlugin",
    "ConfigurableFormatter",
    "FormatterPipeline",
    "create_pipeline",
    "create_default_pipeline",
]
