"""
Per-block edit queues.

Every edit to a block is a read-modify-write of the whole document. Two
edits to the same block that overlap would each read the old text and the
second write would drop the first one's change, so each block gets a queue
that runs its edits one at a time, in submission order.

A failed edit is logged and reported through the notifier; the queue keeps
going and later edits still run.
"""
import asyncio
import inspect
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from .notifier import Notifier

logger = logging.getLogger(__name__)

BlockId = Tuple[str, int]


def block_id(path, index: int) -> BlockId:
    """Stable identity of a block: resolved document path and block index."""
    return (str(Path(path).expanduser().resolve()), index)


class BlockEditQueue:
    """Runs the edits of one block strictly in order."""

    def __init__(self, block: BlockId, notifier: Optional[Notifier] = None):
        self.block = block
        self.notifier = notifier
        self.completed = 0
        self.failures = 0
        self._tail: Optional[asyncio.Task] = None

    def enqueue(self, step: Callable[[], Any]) -> asyncio.Task:
        """
        Schedule `step` after every step already queued.

        Sync steps run in a worker thread. The returned task resolves to the
        step's result, or None if the step failed; it never raises.
        """
        task = asyncio.ensure_future(self._run_after(self._tail, step))
        self._tail = task
        return task

    async def drain(self) -> None:
        """Wait until everything queued so far has run."""
        if self._tail is not None:
            await asyncio.wait([self._tail])

    async def _run_after(self, previous: Optional[asyncio.Task], step: Callable[[], Any]) -> Any:
        if previous is not None:
            await asyncio.wait([previous])
        try:
            if inspect.iscoroutinefunction(step):
                result = await step()
            else:
                result = await asyncio.to_thread(step)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as e:
            self.failures += 1
            path, index = self.block
            logger.exception(f"Edit to {path} block {index} failed")
            if self.notifier:
                self.notifier.notify("Kanban update failed", f"{path} (block {index}): {e}")
            return None
        self.completed += 1
        return result


class EditQueueRegistry:
    """One queue per block, created on first use."""

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier = notifier
        self._queues: Dict[BlockId, BlockEditQueue] = {}

    def queue_for(self, path, index: int) -> BlockEditQueue:
        key = block_id(path, index)
        queue = self._queues.get(key)
        if queue is None:
            queue = BlockEditQueue(key, self.notifier)
            self._queues[key] = queue
        return queue

    async def drain_all(self) -> None:
        for queue in list(self._queues.values()):
            await queue.drain()

    def __len__(self) -> int:
        return len(self._queues)
