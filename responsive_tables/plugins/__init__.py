"""Output formatter plugins.

- formatter_pipeline: priority-ordered streaming pipeline hosting formatters
- responsive_table_formatter: stacks markdown tables too wide for the terminal
"""
