# responsive_tables/tests/test_package.py
"""Tests for the lazily loaded package exports."""

import pytest

import responsive_tables


class TestLazyExports:
    """Tests for the package-level __getattr__."""

    @pytest.mark.parametrize("name", [n for n in responsive_tables.__all__ if n != "__version__"])
    def test_every_export_resolves(self, name):
        assert getattr(responsive_tables, name) is not None

    def test_exports_are_the_real_objects(self):
        from responsive_tables.plugins.responsive_table_formatter.formatter import format_responsive_tables

        assert responsive_tables.format_responsive_tables is format_responsive_tables

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            responsive_tables.does_not_exist

    def test_default_pipeline_end_to_end(self):
        pipeline = responsive_tables.create_default_pipeline(40)
        text = "| a | b |\n|---|---|\n| 1 | 2 |\n"
        assert pipeline.format(text) == text
