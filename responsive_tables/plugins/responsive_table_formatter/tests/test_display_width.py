# responsive_tables/plugins/responsive_table_formatter/tests/test_display_width.py
"""Tests for concealment-aware display width measurement."""

import pytest

from responsive_tables.plugins.responsive_table_formatter.display_width import (
    WidthCache,
    columns,
    conceal,
    measure,
    visible_text,
)


class TestColumns:
    """Tests for the column-width primitive."""

    def test_ascii(self):
        assert columns("hello") == 5

    def test_empty(self):
        assert columns("") == 0

    def test_cjk_is_double_width(self):
        assert columns("漢字") == 4

    def test_combining_mark_is_zero_width(self):
        # "e" + COMBINING ACUTE ACCENT renders as one cell
        assert columns("e\u0301") == 1

    def test_zero_width_space(self):
        assert columns("a\u200bb") == 2

    def test_box_drawing_default_single(self, monkeypatch):
        monkeypatch.delenv("RESPONSIVE_TABLES_AMBIGUOUS_WIDTH", raising=False)
        assert columns("───") == 3

    def test_ambiguous_width_override(self, monkeypatch):
        monkeypatch.setenv("RESPONSIVE_TABLES_AMBIGUOUS_WIDTH", "2")
        assert columns("───") == 6


class TestConcealment:
    """Tests for markdown syntax hidden by the renderer."""

    @pytest.mark.parametrize("text, expected", [
        ("**bold**", "bold"),
        ("*italic*", "italic"),
        ("***both***", "both"),
        ("~~gone~~", "gone"),
        ("![logo](img/logo.png)", "logo"),
        ("![](img/logo.png)", ""),
        ("[repo](https://x.io)", "repo (https://x.io)"),
        ("plain text", "plain text"),
    ])
    def test_single_constructs(self, text, expected):
        assert conceal(text) == expected

    def test_adjacent_emphasis(self):
        assert conceal("***a*** **b**") == "a b"

    def test_nested_emphasis(self):
        assert conceal("**bold *italic* text**") == "bold italic text"

    def test_emphasis_inside_link_text(self):
        assert conceal("[**docs**](https://x.io)") == "docs (https://x.io)"

    def test_unterminated_markers_stay(self):
        assert conceal("**open") == "**open"
        assert conceal("[text](no-close") == "[text](no-close"

    def test_empty_link_text_is_not_a_link(self):
        assert conceal("[](https://x.io)") == "[](https://x.io)"

    def test_bold_with_stray_star_closes_on_next_pair(self):
        # "***a** b*": no *** partner, so ** wins and the leftover * pair follows
        assert conceal("***a** b*") == "a b"


class TestVisibleText:
    """Tests for code span handling around concealment."""

    def test_code_span_backticks_hidden(self):
        assert visible_text("`git status`") == "git status"

    def test_code_span_content_is_literal(self):
        assert visible_text("`**not bold**`") == "**not bold**"

    def test_code_span_with_pipe(self):
        assert visible_text("`a|b`") == "a|b"

    def test_mixed_code_and_emphasis(self):
        assert visible_text("*a* and `*b*`") == "a and *b*"

    def test_bold_around_code(self):
        assert visible_text("**`x`**") == "x"

    def test_lone_backtick_is_literal(self):
        assert visible_text("it`s") == "it`s"

    def test_nul_and_digit_before_code_span(self):
        assert visible_text("\x001`x`") == "\x001x"
        assert visible_text("\x000\x00 `ab` \x001\x00") == "\x000\x00 ab \x001\x00"

    def test_private_use_characters_in_line(self):
        line = "\ue000`ab`\ue000 \ue0010\ue001 `cd`"
        assert visible_text(line) == "\ue000ab\ue000 \ue0010\ue001 cd"

    def test_several_code_spans_restored_in_order(self):
        assert visible_text("`a` **`b`** [`c`](u)") == "a b c (u)"


class TestMeasure:
    """Tests for measure() on table lines."""

    def test_bold_cell(self):
        line = "| **Auth** | Done |"
        assert measure(line) == len(line) - 4

    def test_code_cell(self):
        line = "| `git status` | Show working tree |"
        assert measure(line) == len(line) - 2

    def test_link_cell_counts_url(self):
        line = "| React | [repo](https://github.com/facebook/react) |"
        assert measure(line) == len(line) - 1

    def test_separator_row_counted_as_written(self):
        line = "| --- | :---: |"
        assert measure(line) == len(line)

    def test_wide_characters(self):
        assert measure("| 名前 | 年齢 |") == 15

    def test_control_characters_next_to_code_span(self):
        # NUL has no width; "1" and "x" remain
        assert measure("\x001`x`") == 2


class TestWidthCache:
    """Tests for the bounded width memo."""

    def test_measure_fills_cache_with_raw_line(self):
        cache = WidthCache()
        width = measure("**a**", cache)

        assert width == 1
        assert "**a**" in cache
        assert "a" not in cache
        assert cache.get("**a**") == 1

    def test_cached_value_is_returned(self):
        cache = WidthCache()
        cache.set("line", 42)
        assert measure("line", cache) == 42

    def test_cached_equals_fresh(self):
        cache = WidthCache()
        line = "| **Name** | `x` | [a](b) |"
        first = measure(line, cache)
        assert measure(line, cache) == first == measure(line)

    def test_reset_after_operation_limit(self):
        cache = WidthCache(max_entries=100, max_operations=3)
        cache.set("a", 1)

        assert cache.record_operation() is False
        assert cache.record_operation() is False
        assert cache.record_operation() is False
        assert cache.operations == 3
        assert cache.record_operation() is True

        assert len(cache) == 0
        assert cache.operations == 0

    def test_entry_limit_enforced_on_insert(self):
        cache = WidthCache(max_entries=2, max_operations=100)
        for line in ("a", "b"):
            measure(line, cache)
        assert len(cache) == 2

        measure("c", cache)

        assert len(cache) == 1
        assert "c" in cache
        assert "a" not in cache

    def test_updating_existing_line_at_limit_keeps_entries(self):
        cache = WidthCache(max_entries=2, max_operations=100)
        cache.set("a", 1)
        cache.set("b", 1)
        cache.set("a", 5)

        assert len(cache) == 2
        assert cache.get("a") == 5

    def test_entry_limit_holds_across_a_long_turn(self):
        cache = WidthCache(max_entries=10, max_operations=100)
        for i in range(100):
            measure(f"| row {i} |", cache)
            assert len(cache) <= 10
        assert cache.operations == 0

    def test_ambiguous_width_fixed_when_cache_created(self, monkeypatch):
        monkeypatch.setenv("RESPONSIVE_TABLES_AMBIGUOUS_WIDTH", "1")
        cache = WidthCache()
        assert measure("───", cache) == 3

        monkeypatch.setenv("RESPONSIVE_TABLES_AMBIGUOUS_WIDTH", "2")

        assert cache.ambiguous_width == 1
        assert measure("───", cache) == 3
        assert measure("────", cache) == 4
        assert measure("───", WidthCache()) == 6

    def test_explicit_reset(self):
        cache = WidthCache()
        measure("abc", cache)
        cache.record_operation()

        cache.reset()

        assert len(cache) == 0
        assert cache.operations == 0
