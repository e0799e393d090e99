# Responsive tables package
#
# Reformats markdown tables in model output so they stay readable in a
# fixed-width terminal. Everything a host needs is importable from here:
#
#   from responsive_tables import (
#       format_responsive_tables, WidthCache,
#       create_default_pipeline, ResponsiveTableFormatterPlugin,
#   )
#
# Lazy loading: imports are deferred via __getattr__ so that importing the
# trace or terminal helpers does not pull in the formatter stack.

__version__ = "0.1.0"

# Mapping from public name -> (module_path, attribute_name)
_LAZY_IMPORTS = {
    # Core transform
    "format_responsive_tables": (".plugins.responsive_table_formatter.formatter", "format_responsive_tables"),
    "WidthCache": (".plugins.responsive_table_formatter.display_width", "WidthCache"),
    "measure": (".plugins.responsive_table_formatter.display_width", "measure"),
    # Host integration
    "ResponsiveTableFormatterPlugin": (".plugins.responsive_table_formatter.plugin", "ResponsiveTableFormatterPlugin"),
    "FormatterPipeline": (".plugins.formatter_pipeline.pipeline", "FormatterPipeline"),
    "create_default_pipeline": (".plugins.formatter_pipeline.pipeline", "create_default_pipeline"),
    # Utilities
    "get_terminal_columns": (".terminal_width", "get_terminal_columns"),
    "get_max_width": (".terminal_width", "get_max_width"),
    "configure_utf8_output": (".console_encoding", "configure_utf8_output"),
}


def __getattr__(name):
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        import importlib
        module = importlib.import_module(module_path, __name__)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    # Core transform
    "format_responsive_tables",
    "WidthCache",
    "measure",
    # Host integration
    "ResponsiveTableFormatterPlugin",
    "FormatterPipeline",
    "create_default_pipeline",
    # Utilities
    "get_terminal_columns",
    "get_max_width",
    "configure_utf8_output",
]
