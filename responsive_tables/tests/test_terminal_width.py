# responsive_tables/tests/test_terminal_width.py
"""Tests for terminal width detection."""

import io

import pytest

from responsive_tables.terminal_width import DEFAULT_MARGIN, get_max_width, get_terminal_columns


class TestTerminalColumns:
    """Tests for get_terminal_columns()."""

    def test_columns_env_wins(self, monkeypatch):
        monkeypatch.setenv("COLUMNS", "120")
        assert get_terminal_columns() == 120

    def test_no_terminal_is_unknown(self, monkeypatch):
        monkeypatch.delenv("COLUMNS", raising=False)
        monkeypatch.setattr("sys.stdout", io.StringIO())
        assert get_terminal_columns() is None

    @pytest.mark.parametrize("value", ["abc", "0", "-5"])
    def test_unusable_env_falls_back_to_terminal(self, monkeypatch, value):
        monkeypatch.setenv("COLUMNS", value)
        monkeypatch.setattr("sys.stdout", io.StringIO())
        assert get_terminal_columns() is None


class TestMaxWidth:
    """Tests for get_max_width()."""

    def test_default_margin(self):
        assert DEFAULT_MARGIN == 10
        assert get_max_width(40) == 30

    def test_custom_margin(self):
        assert get_max_width(40, margin=0) == 40

    @pytest.mark.parametrize("columns", [None, 0])
    def test_unknown(self, columns):
        assert get_max_width(columns) is None

    def test_narrow_terminal_clamped_to_one(self):
        assert get_max_width(5) == 1
        assert get_max_width(10) == 1
