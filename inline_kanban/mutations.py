"""
Board mutations.

Pure functions: the input board is never modified, a new board is returned.
Indices that do not point anywhere make the move a no-op rather than an
error, and only order ever changes (no card or column is created or lost).
"""
import logging
from typing import Optional

from .schema import KanbanBoard

logger = logging.getLogger(__name__)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _in_range(index: int, length: int) -> bool:
    return 0 <= index < length


def card_landing_index(
    board: KanbanBoard,
    from_column: int,
    from_item: int,
    to_column: int,
    to_item: int,
) -> Optional[int]:
    """Index the card will have in to_column after move_card, or None if the move is a no-op."""
    columns = board.columns
    if not _in_range(from_column, len(columns)) or not _in_range(to_column, len(columns)):
        return None
    if not _in_range(from_item, len(columns[from_column].items)):
        return None

    remaining = len(columns[to_column].items)
    insert_at = to_item
    if from_column == to_column:
        remaining -= 1
        if from_item < to_item:
            insert_at -= 1
    return _clamp(insert_at, 0, remaining)


def move_card(
    board: KanbanBoard,
    from_column: int,
    from_item: int,
    to_column: int,
    to_item: int,
) -> KanbanBoard:
    """
    Move the card at (from_column, from_item) so it lands at to_item in to_column.

    to_item is an insertion index into the target column as it looked
    before the card was lifted out.
    """
    moved = board.clone()
    insert_at = card_landing_index(moved, from_column, from_item, to_column, to_item)
    if insert_at is None:
        logger.debug(
            f"move_card ignored: ({from_column}, {from_item}) -> ({to_column}, {to_item}) out of range"
        )
        return moved

    card = moved.columns[from_column].items.pop(from_item)
    moved.columns[to_column].items.insert(insert_at, card)
    return moved


def move_column(board: KanbanBoard, from_index: int, to_index: int) -> KanbanBoard:
    """
    Move a column so it lands at to_index.

    to_index is an insertion index into the column list as it looked before
    the column was lifted out; anything past the end means "last".
    """
    moved = board.clone()
    columns = moved.columns
    if not _in_range(from_index, len(columns)):
        logger.debug(f"move_column ignored: column {from_index} out of range")
        return moved

    insert_at = _clamp(to_index, 0, len(columns))
    column = columns.pop(from_index)
    if from_index < insert_at:
        insert_at -= 1
    columns.insert(insert_at, column)
    return moved
