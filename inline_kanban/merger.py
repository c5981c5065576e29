"""
Format-preserving write-back.

Given the original lines of a block and an edited board, rewrite only the
list lines under `columns:` and `items:`. Everything else in the block
(comments, blank lines above and below the lists, header wording, the
author's bullet and indentation, bracket vs. colon item notation) comes
through byte-identical.

When the block does not have own-line `columns:` and `items:` headers in
that order, the block is regenerated in canonical form instead.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .grammar import ItemNotation, detect_notation
from .schema import KanbanBoard

logger = logging.getLogger(__name__)

COLUMNS_LINE_RE = re.compile(r"^\s*columns:\s*$", re.IGNORECASE)
ITEMS_LINE_RE = re.compile(r"^\s*items:\s*$", re.IGNORECASE)
LIST_LINE_RE = re.compile(r"^(\s*[-*]\s+)\S")
LEADING_WS_RE = re.compile(r"^\s*")

DEFAULT_PREFIX = "  - "


@dataclass
class ListRange:
    """Lines [start, end) of a section that hold its list, plus the bullet prefix in use."""
    start: int
    end: int
    prefix: str


def _find_header(lines: List[str], pattern: re.Pattern) -> Optional[int]:
    for i, line in enumerate(lines):
        if pattern.match(line):
            return i
    return None


def _is_blank(line: str) -> bool:
    return not line.strip()


def _is_indented(line: str) -> bool:
    return bool(line) and line[0].isspace() and bool(line.strip())


def find_list_range(lines: List[str], header: int, section_end: int) -> ListRange:
    """
    Locate the list inside the section that follows lines[header].

    The range runs from the first list line through the last one, plus any
    indented lines hanging off the last entry (its continuation lines and
    blank lines between them). Blank lines after the final continuation
    stay outside the range.
    """
    section_start = header + 1
    list_lines = [i for i in range(section_start, section_end) if LIST_LINE_RE.match(lines[i])]
    if not list_lines:
        indent = LEADING_WS_RE.match(lines[header]).group(0)
        return ListRange(start=section_start, end=section_start, prefix=f"{indent}{DEFAULT_PREFIX}")

    first, last = list_lines[0], list_lines[-1]
    end = last + 1
    while end < section_end and (_is_blank(lines[end]) or _is_indented(lines[end])):
        end += 1
    while end > last + 1 and _is_blank(lines[end - 1]):
        end -= 1

    prefix = LIST_LINE_RE.match(lines[first]).group(1)
    return ListRange(start=first, end=end, prefix=prefix)


def detect_item_notation(lines: List[str]) -> ItemNotation:
    """Notation of the first list line that uses one; bracket if none does."""
    for line in lines:
        match = LIST_LINE_RE.match(line)
        if not match:
            continue
        notation = detect_notation(line[match.end(1):])
        if notation is not None:
            return notation
    return ItemNotation.BRACKET


def format_item(prefix: str, status: str, text: str, notation: ItemNotation) -> List[str]:
    """
    Lines for one item: the entry line, then continuation lines indented
    under the entry's content. Empty items produce nothing.

    A status holding `:` is always bracketed and one holding `]` is written
    with a colon, so it reads back as the same status.
    """
    text_lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not text_lines:
        return []

    status = status.strip()
    if not status:
        first = f"{prefix}{text_lines[0]}"
    elif ":" not in status and (notation is ItemNotation.COLON or "]" in status):
        first = f"{prefix}{status}: {text_lines[0]}"
    else:
        first = f"{prefix}[{status}] {text_lines[0]}"

    indent = " " * len(prefix)
    return [first] + [f"{indent}{line}" for line in text_lines[1:]]


def format_columns(board: KanbanBoard, prefix: str) -> List[str]:
    return [f"{prefix}{column.raw_name}" for column in board.columns]


def format_items(board: KanbanBoard, prefix: str, notation: ItemNotation) -> List[str]:
    lines: List[str] = []
    for column in board.columns:
        for text in column.items:
            lines.extend(format_item(prefix, column.status_name, text, notation))
    return lines


def serialize_board(board: KanbanBoard) -> List[str]:
    """Canonical block text for a board."""
    return (
        ["columns:"]
        + format_columns(board, DEFAULT_PREFIX)
        + ["items:"]
        + format_items(board, DEFAULT_PREFIX, ItemNotation.BRACKET)
    )


def merge_kanban_block(original_lines: List[str], board: KanbanBoard) -> List[str]:
    """Write board back into original_lines, touching only the two list ranges."""
    lines = list(original_lines)
    columns_header = _find_header(lines, COLUMNS_LINE_RE)
    items_header = _find_header(lines, ITEMS_LINE_RE)

    if columns_header is None or items_header is None or columns_header >= items_header:
        logger.debug("Block has no own-line columns:/items: headers in order; regenerating")
        return serialize_board(board)

    column_range = find_list_range(lines, columns_header, items_header)
    item_range = find_list_range(lines, items_header, len(lines))
    notation = detect_item_notation(lines[items_header + 1:])

    return (
        lines[:column_range.start]
        + format_columns(board, column_range.prefix)
        + lines[column_range.end:item_range.start]
        + format_items(board, item_range.prefix, notation)
        + lines[item_range.end:]
    )
