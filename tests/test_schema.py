"""Tests for the board model."""
from inline_kanban.schema import KanbanBoard, KanbanColumn, build_raw_name
from inline_kanban.grammar import parse_column_definition


def test_build_raw_name():
    assert build_raw_name("Todo") == "Todo"
    assert build_raw_name("Doing", 2) == "Doing (2)"
    assert build_raw_name("Done", None, "#22c55e") == "Done {#22c55e}"
    assert build_raw_name("Review", 0, "#fff") == "Review (0) {#fff}"


def test_raw_name_reparses_to_same_parts():
    raw = build_raw_name("In Review", 4, "#abcdef")
    definition = parse_column_definition(raw)
    assert (definition.base_name, definition.wip_limit, definition.color) == ("In Review", 4, "#abcdef")


class TestKanbanColumn:

    def test_build_derives_raw_name(self):
        column = KanbanColumn.build("  Doing ", 2, items=["a"])
        assert column.name == "Doing"
        assert column.raw_name == "Doing (2)"
        assert column.status_name == "Doing"
        assert column.items == ["a"]

    def test_with_changes_rebuilds_raw_name(self):
        column = KanbanColumn.build("Doing", 2, "#fff", items=["a"])
        changed = column.with_changes(wip_limit=3, color=None)
        assert changed.raw_name == "Doing (3)"
        assert changed.items == ["a"]
        assert column.raw_name == "Doing (2) {#fff}"

    def test_with_changes_renames(self):
        changed = KanbanColumn.build("Todo").with_changes(name="Backlog")
        assert (changed.name, changed.raw_name, changed.status_name) == ("Backlog", "Backlog", "Backlog")

    def test_raw_status_name_follows_changes(self):
        column = KanbanColumn.build("Doing", 2)
        column.status_name = column.raw_name
        assert column.with_changes(wip_limit=5).status_name == "Doing (5)"

    def test_is_over_limit(self):
        assert not KanbanColumn.build("Doing", 2, items=["a", "b"]).is_over_limit()
        assert KanbanColumn.build("Doing", 1, items=["a", "b"]).is_over_limit()
        assert not KanbanColumn.build("Todo", items=["a"] * 10).is_over_limit()


class TestKanbanBoard:

    def test_clone_is_deep(self):
        board = KanbanBoard([KanbanColumn.build("Todo", items=["a"])])
        copy = board.clone()
        copy.columns[0].items.append("b")
        assert board.columns[0].items == ["a"]

    def test_helpers(self):
        board = KanbanBoard([
            KanbanColumn.build("Todo", items=["a", "b"]),
            KanbanColumn.build("Done", color="#000"),
        ])
        assert board.total_items() == 2
        assert board.column_names() == ["Todo", "Done"]
        data = board.to_dict()
        assert data["columns"][1]["raw_name"] == "Done {#000}"
        assert data["columns"][0]["items"] == ["a", "b"]
