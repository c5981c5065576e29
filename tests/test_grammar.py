"""Tests for line recognizers and declaration parsing."""
import pytest

from inline_kanban.grammar import (
    Section,
    ItemNotation,
    match_header,
    inline_columns,
    match_list_entry,
    parse_column_definition,
    parse_item_entry,
    normalize_column_key,
    normalize_hex_color,
    detect_notation,
)
from inline_kanban.schema import DEFAULT_COLUMN, build_raw_name


class TestHeaders:

    def test_columns_header(self):
        assert match_header("columns:") is Section.COLUMNS
        assert match_header("COLUMNS:   ") is Section.COLUMNS

    def test_inline_columns_header(self):
        assert match_header("columns: Todo, Done") is Section.COLUMNS
        assert inline_columns("columns: Todo, Doing (2), , Done") == ["Todo", "Doing (2)", "Done"]

    def test_items_header(self):
        assert match_header("Items:") is Section.ITEMS

    def test_items_with_text_is_not_a_header(self):
        assert match_header("items: foo") is None
        assert match_header("- columns:") is None


class TestListEntry:

    def test_dash_and_star(self):
        assert match_list_entry("- Todo") == "Todo"
        assert match_list_entry("*   Done  ") == "Done"

    def test_requires_whitespace_after_bullet(self):
        assert match_list_entry("-Todo") is None
        assert match_list_entry("-") is None
        assert match_list_entry("plain text") is None


class TestColumnDefinition:

    def test_wip_limit(self):
        definition = parse_column_definition("Doing (3)")
        assert definition.raw_name == "Doing (3)"
        assert definition.base_name == "Doing"
        assert definition.wip_limit == 3

    def test_color_and_limit(self):
        definition = parse_column_definition("Review (2) {#FF8800}")
        assert definition.raw_name == "Review (2) {#FF8800}"
        assert definition.base_name == "Review"
        assert definition.wip_limit == 2
        assert definition.color == "#ff8800"

    def test_plain_name(self):
        definition = parse_column_definition("  Backlog ")
        assert definition.raw_name == "Backlog"
        assert definition.base_name == "Backlog"
        assert definition.wip_limit is None
        assert definition.color is None

    @pytest.mark.parametrize("digits", ["abc", "a1b2c3", "a1b2c3d4"])
    def test_color_lengths(self, digits):
        assert parse_column_definition(f"Todo {{#{digits}}}").color == f"#{digits}"

    def test_bad_color_stays_in_name(self):
        definition = parse_column_definition("Todo {#abcd}")
        assert definition.color is None
        assert definition.base_name == "Todo {#abcd}"

    def test_non_numeric_limit_stays_in_name(self):
        definition = parse_column_definition("Doing (two)")
        assert definition.wip_limit is None
        assert definition.base_name == "Doing (two)"

    def test_limit_must_come_before_color(self):
        definition = parse_column_definition("Doing {#fff} (2)")
        assert definition.wip_limit == 2
        assert definition.color is None
        assert definition.base_name == "Doing {#fff}"

    def test_bare_limit_keeps_a_name(self):
        definition = parse_column_definition("(4)")
        assert definition.wip_limit == 4
        assert definition.base_name == "(4)"

    def test_build_raw_name_reparses(self):
        raw = build_raw_name("Doing", 3, "#3b82f6")
        assert raw == "Doing (3) {#3b82f6}"
        definition = parse_column_definition(raw)
        assert (definition.base_name, definition.wip_limit, definition.color) == ("Doing", 3, "#3b82f6")


class TestKeys:

    def test_key_ignores_suffixes_and_case(self):
        assert normalize_column_key("Doing (3)") == normalize_column_key(" doing (5) ")
        assert normalize_column_key("Doing (3)") == "doing"

    def test_normalize_hex_color(self):
        assert normalize_hex_color("#ABC") == "#abc"
        assert normalize_hex_color("#abcd") is None
        assert normalize_hex_color(None) is None


class TestItemEntry:

    def test_bracket_notation(self):
        item = parse_item_entry("[Todo] Task A")
        assert (item.status, item.text) == ("Todo", "Task A")

    def test_colon_notation(self):
        item = parse_item_entry("Doing: Task B")
        assert (item.status, item.text) == ("Doing", "Task B")

    def test_bracket_wins_over_colon(self):
        item = parse_item_entry("[Todo] Call Bob: re invoice")
        assert (item.status, item.text) == ("Todo", "Call Bob: re invoice")

    def test_plain_text_goes_to_default(self):
        item = parse_item_entry("just a note")
        assert (item.status, item.text) == (DEFAULT_COLUMN, "just a note")

    def test_empty_text_keeps_whole_entry(self):
        item = parse_item_entry("[Todo]")
        assert (item.status, item.text) == ("Todo", "[Todo]")
        item = parse_item_entry("Waiting:")
        assert (item.status, item.text) == ("Waiting", "Waiting:")

    def test_blank_bracket_status(self):
        item = parse_item_entry("[ ] buy milk")
        assert (item.status, item.text) == (DEFAULT_COLUMN, "buy milk")

    def test_detect_notation(self):
        assert detect_notation("[Todo] x") is ItemNotation.BRACKET
        assert detect_notation("Todo: x") is ItemNotation.COLON
        assert detect_notation("no status") is None
