"""
Column resolution.

Reconciles the columns a block declares with the statuses its items use:

  1. Declared columns, in order. A repeated declaration (same base name,
     case-insensitive) only fills fields the first one left empty,
     and the declaration text is rebuilt to carry them.
  2. No declarations: one column per item status, in first-seen order.
  3. Nothing at all: a single DEFAULT_COLUMN.
  4. Items land in the column matching their status; an unknown status
     gets a column of its own.
  5. Each column picks the status name used when items are written back.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List

from .grammar import parse_column_definition, normalize_column_key, normalize_key
from .schema import ColumnDefinition, KanbanItem, KanbanColumn, KanbanBoard, DEFAULT_COLUMN

logger = logging.getLogger(__name__)


@dataclass
class _StatusUsage:
    raw_matches: int = 0
    base_matches: int = 0


class _ColumnIndex:
    """Columns keyed by normalized base name, in creation order."""

    def __init__(self):
        self.by_key: Dict[str, KanbanColumn] = {}
        self.order: List[str] = []

    def __len__(self) -> int:
        return len(self.order)

    def get(self, key: str):
        return self.by_key.get(key)

    def ensure(self, definition: ColumnDefinition) -> KanbanColumn:
        key = normalize_column_key(definition.raw_name)
        existing = self.by_key.get(key)
        if existing is not None:
            if existing.raw_name != definition.raw_name:
                logger.debug(f"Duplicate column declaration {definition.raw_name!r} merged into {existing.raw_name!r}")
            # First declaration wins; later ones only fill gaps
            wip_limit = existing.wip_limit if existing.wip_limit is not None else definition.wip_limit
            color = existing.color or definition.color
            if (wip_limit, color) != (existing.wip_limit, existing.color):
                existing = existing.with_changes(wip_limit=wip_limit, color=color)
                self.by_key[key] = existing
            return existing
        column = KanbanColumn.from_definition(definition)
        self.by_key[key] = column
        self.order.append(key)
        return column

    def columns(self) -> List[KanbanColumn]:
        return [self.by_key[key] for key in self.order]


def resolve_board(definitions: List[ColumnDefinition], items: List[KanbanItem]) -> KanbanBoard:
    """Build a board from harvested declarations and items."""
    index = _ColumnIndex()
    usage: Dict[str, _StatusUsage] = {}

    for definition in definitions:
        index.ensure(definition)

    if len(index) == 0:
        for item in items:
            if item.status:
                index.ensure(parse_column_definition(item.status))

    if len(index) == 0:
        index.ensure(parse_column_definition(DEFAULT_COLUMN))

    for item in items:
        status = item.status or DEFAULT_COLUMN
        key = normalize_column_key(status)
        column = index.get(key)
        if column is None:
            column = index.ensure(parse_column_definition(status))
        column.items.append(item.text)

        counts = usage.setdefault(key, _StatusUsage())
        trimmed = status.strip()
        if trimmed and normalize_key(trimmed) == normalize_key(column.raw_name):
            counts.raw_matches += 1
        if trimmed and normalize_key(trimmed) == normalize_key(column.name):
            counts.base_matches += 1

    for key in index.order:
        column = index.by_key[key]
        counts = usage.get(key)
        # Keep a suffixed marker only when the author never used the bare name
        if counts and counts.raw_matches > 0 and counts.base_matches == 0:
            column.status_name = column.raw_name
        else:
            column.status_name = column.name

    return KanbanBoard(columns=index.columns())
