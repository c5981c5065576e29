"""
Board session: what the interaction layer talks to.

Turns gestures (a card or column drop, with its drag payload) into queued
document edits, and keeps the UI caches that survive re-renders.
"""
import asyncio
import logging
from typing import List, Optional, Tuple

from .cache import PendingHighlight, PendingHighlightCache, ScrollOffsetCache
from .config import Config
from .document import BoardEdit, KanbanDocument
from .edit_queue import EditQueueRegistry, block_id
from .mutations import card_landing_index, move_card, move_column
from .notifier import Notifier
from .payload import parse_card_drag_payload, parse_column_drag_payload
from .schema import KanbanBoard

logger = logging.getLogger(__name__)


class BoardSession:
    """Documents, their edit queues and the highlight/scroll caches."""

    def __init__(self, config: Optional[Config] = None, notifier: Optional[Notifier] = None):
        self.config = config or Config()
        self.notifier = notifier or Notifier(self.config.notify_url, self.config.notify_timeout_secs)
        self.queues = EditQueueRegistry(self.notifier)
        self.highlights = PendingHighlightCache(self.config.highlight_ttl_secs)
        self.scroll = ScrollOffsetCache()

    def document(self, path) -> KanbanDocument:
        return KanbanDocument(path, self.config.fence_language)

    # ── Edits ────────────────────────────────────────────────

    def submit(self, path, index: int, edit: BoardEdit) -> asyncio.Task:
        """Queue a read-modify-write of block `index`; resolves to True if the file changed."""
        doc = self.document(path)
        return self.queues.queue_for(path, index).enqueue(lambda: doc.apply_edit(index, edit))

    def move_card(self, path, index: int, from_column: int, from_item: int,
                  to_column: int, to_item: int) -> asyncio.Task:
        landed: List[int] = []

        def edit(board: KanbanBoard) -> KanbanBoard:
            landing = card_landing_index(board, from_column, from_item, to_column, to_item)
            if landing is not None:
                landed.append(landing)
            return move_card(board, from_column, from_item, to_column, to_item)

        doc = self.document(path)
        doc_id = block_id(path, index)[0]

        def step() -> bool:
            written = doc.apply_edit(index, edit)
            if landed:
                self.highlights.mark(doc_id, to_column, landed[0])
            return written

        return self.queues.queue_for(path, index).enqueue(step)

    def move_column(self, path, index: int, from_index: int, to_index: int) -> asyncio.Task:
        return self.submit(path, index, lambda board: move_column(board, from_index, to_index))

    def format_block(self, path, index: int) -> asyncio.Task:
        """Rewrite a block through the merger without changing the board."""
        return self.submit(path, index, lambda board: board)

    def drop_card(self, path, index: int, raw_payload: str,
                  to_column: int, to_item: int) -> Optional[asyncio.Task]:
        """Card dropped at (to_column, to_item); None if the payload is rejected."""
        payload = parse_card_drag_payload(raw_payload)
        if payload is None:
            logger.debug(f"Ignoring card drop with payload {raw_payload!r}")
            return None
        return self.move_card(path, index, payload.column_index, payload.item_index, to_column, to_item)

    def drop_column(self, path, index: int, raw_payload: str, to_index: int) -> Optional[asyncio.Task]:
        """Column dropped at to_index; None if the payload is rejected."""
        payload = parse_column_drag_payload(raw_payload)
        if payload is None:
            logger.debug(f"Ignoring column drop with payload {raw_payload!r}")
            return None
        return self.move_column(path, index, payload.column_index, to_index)

    async def drain(self) -> None:
        await self.queues.drain_all()

    # ── Rendering state ──────────────────────────────────────

    def snapshot(self, path, index: int) -> Tuple[KanbanBoard, Optional[PendingHighlight], int]:
        """Board to render, the card to highlight (if any) and the remembered column offset."""
        board = self.document(path).board(index)
        highlight = self.highlights.take(block_id(path, index)[0])
        offset = self.scroll.recall(block_id(path, index))
        return board, highlight, offset
