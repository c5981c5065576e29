"""
Drag payloads.

The interaction layer hands cards and columns around as small JSON strings:

    {"columnIndex": 1, "itemIndex": 3}     card
    {"columnIndex": 2}                     column

Decoding never raises; anything that is not exactly that shape, with
non-negative integer indices, decodes to None.
"""
import json
import logging
import math
from dataclasses import dataclass
from typing import Optional, Any, Dict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardDragPayload:
    column_index: int
    item_index: int

    def to_json(self) -> str:
        return json.dumps({"columnIndex": self.column_index, "itemIndex": self.item_index})


@dataclass(frozen=True)
class ColumnDragPayload:
    column_index: int

    def to_json(self) -> str:
        return json.dumps({"columnIndex": self.column_index})


def _as_index(value: Any) -> Optional[int]:
    """Non-negative integer value of a JSON number, or None."""
    # bool is an int subclass but never a valid index
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    # JSON has no integer type: 2.0 is accepted, 2.5 / NaN / Infinity are not
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and value >= 0:
        return int(value)
    return None


def _load_object(raw: Any) -> Optional[Dict[str, Any]]:
    if not raw or not isinstance(raw, (str, bytes, bytearray)):
        return None
    try:
        parsed = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Rejected drag payload: {e}")
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def parse_card_drag_payload(raw: Any) -> Optional[CardDragPayload]:
    """Decode a card payload; None unless both indices are valid."""
    parsed = _load_object(raw)
    if parsed is None:
        return None
    column_index = _as_index(parsed.get("columnIndex"))
    item_index = _as_index(parsed.get("itemIndex"))
    if column_index is None or item_index is None:
        return None
    return CardDragPayload(column_index=column_index, item_index=item_index)


def parse_column_drag_payload(raw: Any) -> Optional[ColumnDragPayload]:
    """Decode a column payload; None unless columnIndex is valid."""
    parsed = _load_object(raw)
    if parsed is None:
        return None
    column_index = _as_index(parsed.get("columnIndex"))
    if column_index is None:
        return None
    return ColumnDragPayload(column_index=column_index)
