"""
Small process-wide UI caches.

Neither is needed for correctness: losing an entry only means a card is not
highlighted after a move, or a board re-renders from its first column.
"""
import time
from dataclasses import dataclass
from typing import Dict, Hashable, Optional


@dataclass(frozen=True)
class PendingHighlight:
    column_index: int
    item_index: int
    expires_at: float            # time.monotonic()


class PendingHighlightCache:
    """Card to highlight on the next render of a document, for a short window."""

    def __init__(self, ttl_secs: float = 1.5):
        self.ttl_secs = ttl_secs
        self._pending: Dict[Hashable, PendingHighlight] = {}

    def mark(self, doc_id: Hashable, column_index: int, item_index: int) -> None:
        self._pending[doc_id] = PendingHighlight(
            column_index=column_index,
            item_index=item_index,
            expires_at=time.monotonic() + self.ttl_secs,
        )

    def take(self, doc_id: Hashable) -> Optional[PendingHighlight]:
        """Return and forget the marker for doc_id, unless it already expired."""
        marker = self._pending.pop(doc_id, None)
        if marker is None or time.monotonic() > marker.expires_at:
            return None
        return marker

    def __len__(self) -> int:
        return len(self._pending)


class ScrollOffsetCache:
    """Last known horizontal offset of each rendered block."""

    def __init__(self):
        self._offsets: Dict[Hashable, int] = {}

    def remember(self, block: Hashable, offset: int) -> None:
        self._offsets[block] = max(0, offset)

    def recall(self, block: Hashable, default: int = 0) -> int:
        return self._offsets.get(block, default)

    def forget(self, block: Hashable) -> None:
        self._offsets.pop(block, None)
