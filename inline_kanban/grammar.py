"""
Line-level grammar of a kanban block.

    columns:
      - Todo
      - Doing (3) {#f59e0b}
    items:
      - [Todo] Write the parser
          continuation line
      - Doing: Review the merger

Recognizers work on single lines and never raise: anything that does not
match is left for the caller to ignore.
"""
import re
from enum import Enum
from typing import Optional, List

from .schema import ColumnDefinition, KanbanItem, DEFAULT_COLUMN


class Section(Enum):
    """Which part of the block the scanner is in."""
    NONE = "none"
    COLUMNS = "columns"
    ITEMS = "items"


class ItemNotation(Enum):
    """How an item line carries its status."""
    BRACKET = "bracket"      # - [Todo] text
    COLON = "colon"          # - Todo: text


# ── Headers ──────────────────────────────────────────────────
COLUMNS_INLINE_RE = re.compile(r"^columns:\s*(.+)$", re.IGNORECASE)
COLUMNS_HEADER_RE = re.compile(r"^columns:\s*$", re.IGNORECASE)
ITEMS_HEADER_RE = re.compile(r"^items:\s*$", re.IGNORECASE)

# ── Entries ──────────────────────────────────────────────────
LIST_ENTRY_RE = re.compile(r"^[-*]\s+(.*)$")
BRACKET_ITEM_RE = re.compile(r"^\[(.+?)\]\s*(.*)$")
COLON_ITEM_RE = re.compile(r"^([^:]+):\s*(.*)$")

# ── Column suffixes ──────────────────────────────────────────
COLOR_SUFFIX_RE = re.compile(
    r"^(.*?)\s*\{(#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3}))\}\s*$"
)
WIP_SUFFIX_RE = re.compile(r"^(.*?)\s*\(([0-9]+)\)\s*$")
HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-f]{8}|[0-9a-f]{6}|[0-9a-f]{3})$")


def match_header(line: str) -> Optional[Section]:
    """Section switched to by a trimmed line, if it is a header."""
    if COLUMNS_HEADER_RE.match(line) or COLUMNS_INLINE_RE.match(line):
        return Section.COLUMNS
    if ITEMS_HEADER_RE.match(line):
        return Section.ITEMS
    return None


def inline_columns(line: str) -> List[str]:
    """Column tokens declared on the header line itself (`columns: a, b`)."""
    match = COLUMNS_INLINE_RE.match(line)
    if not match:
        return []
    return split_comma_list(match.group(1))


def match_list_entry(line: str) -> Optional[str]:
    """Payload of a trimmed `- x` / `* x` line, or None."""
    match = LIST_ENTRY_RE.match(line)
    if not match:
        return None
    return match.group(1).strip()


def split_comma_list(raw: str) -> List[str]:
    return [entry.strip() for entry in raw.split(",") if entry.strip()]


def normalize_key(value: str) -> str:
    return value.strip().lower()


def normalize_hex_color(value: Optional[str]) -> Optional[str]:
    """Lower-cased color if it has 3, 6 or 8 hex digits, else None."""
    if not value:
        return None
    normalized = value.strip().lower()
    if not HEX_COLOR_RE.match(normalized):
        return None
    return normalized


def parse_column_definition(raw_name: str) -> ColumnDefinition:
    """
    Split a column declaration into name, WIP limit and color.

    Suffixes are read right to left: `{#hex}` color first, then `(N)`.
    A suffix that does not have the right shape stays part of the name.
    """
    trimmed = raw_name.strip()
    working = trimmed
    color = None

    color_match = COLOR_SUFFIX_RE.match(working)
    if color_match:
        color = normalize_hex_color(color_match.group(2))
        if color:
            working = color_match.group(1).strip()

    wip_match = WIP_SUFFIX_RE.match(working)
    if not wip_match:
        return ColumnDefinition(raw_name=trimmed, base_name=working or trimmed, color=color)

    try:
        limit = int(wip_match.group(2))
    except ValueError:
        return ColumnDefinition(raw_name=trimmed, base_name=working or trimmed, color=color)

    return ColumnDefinition(
        raw_name=trimmed,
        base_name=wip_match.group(1).strip() or working or trimmed,
        wip_limit=limit,
        color=color,
    )


def normalize_column_key(value: str) -> str:
    """Identity of a column: its base name, trimmed and lower-cased."""
    base_name = parse_column_definition(value).base_name
    return normalize_key(base_name or value)


def detect_notation(entry: str) -> Optional[ItemNotation]:
    """Notation an item payload is written in, if any."""
    text = entry.strip()
    if BRACKET_ITEM_RE.match(text):
        return ItemNotation.BRACKET
    if COLON_ITEM_RE.match(text):
        return ItemNotation.COLON
    return None


def parse_item_entry(raw: str) -> KanbanItem:
    """
    Split an item payload into status and text.

    `[Status] text` wins over `Status: text`; anything else is all text.
    If a notation leaves no text behind, the whole entry is kept as text.
    """
    status = ""
    text = raw.strip()

    bracket_match = BRACKET_ITEM_RE.match(text)
    if bracket_match:
        status = bracket_match.group(1).strip()
        text = bracket_match.group(2).strip()
    else:
        colon_match = COLON_ITEM_RE.match(text)
        if colon_match:
            status = colon_match.group(1).strip()
            text = colon_match.group(2).strip()

    if not status:
        status = DEFAULT_COLUMN
    if not text:
        text = raw.strip()

    return KanbanItem(status=status, text=text)
