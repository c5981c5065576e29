"""
Kanban block parser.

Turns the text between the fences into a KanbanBoard. The parser is lax on
purpose: it is fed hand-written Markdown, so lines it does not recognize are
skipped and it never raises.
"""
import re
from dataclasses import dataclass, field
from typing import List

from .grammar import (
    Section,
    match_header,
    inline_columns,
    match_list_entry,
    parse_column_definition,
    parse_item_entry,
)
from .resolver import resolve_board
from .schema import ColumnDefinition, KanbanItem, KanbanBoard

LINE_SPLIT_RE = re.compile(r"\r?\n")
LEADING_WS_RE = re.compile(r"^\s+")


@dataclass
class ParseResult:
    """Raw harvest of a block before columns are resolved."""
    definitions: List[ColumnDefinition] = field(default_factory=list)
    items: List[KanbanItem] = field(default_factory=list)


def scan_source(source: str) -> ParseResult:
    """Collect column declarations and item entries in encounter order."""
    result = ParseResult()
    section = Section.NONE

    for raw_line in LINE_SPLIT_RE.split(source or ""):
        line = raw_line.strip()
        if not line:
            continue

        header = match_header(line)
        if header is not None:
            section = header
            for entry in inline_columns(line):
                result.definitions.append(parse_column_definition(entry))
            continue

        entry = match_list_entry(line)
        if entry is not None:
            if section is Section.COLUMNS:
                if entry:
                    result.definitions.append(parse_column_definition(entry))
                continue
            if section is Section.ITEMS:
                result.items.append(parse_item_entry(entry))
                continue

        # Indented text under an item belongs to that item
        if section is Section.ITEMS and result.items and LEADING_WS_RE.match(raw_line):
            result.items[-1].text += f"\n{line}"

    return result


def parse_kanban_source(source: str) -> KanbanBoard:
    """Parse block text into a resolved board."""
    result = scan_source(source)
    return resolve_board(result.definitions, result.items)
