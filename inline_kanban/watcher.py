"""
Document watcher.

Calls back whenever the watched Markdown file changes on disk. Editors often
save through a temp file + rename, so moves onto the file count as changes.
"""
import logging
import threading
import time
from pathlib import Path
from typing import Callable, Dict, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


class DocumentChangeHandler(FileSystemEventHandler):
    """Routes filesystem events for one file to a callback, debounced."""

    def __init__(self, path, on_change: Callable[[Path], None], debounce_ms: int = 300):
        self.path = Path(path).expanduser().resolve()
        self.on_change = on_change
        self.debounce_ms = debounce_ms
        self._last_seen: Dict[Path, float] = {}

    def _debounce(self, path: Path) -> bool:
        """Return True if this path hasn't fired within the debounce window."""
        now = time.monotonic()
        last = self._last_seen.get(path)
        if last is not None and (now - last) < (self.debounce_ms / 1000):
            return False
        self._last_seen[path] = now
        return True

    def _targets_document(self, fs_event) -> bool:
        candidates = [fs_event.src_path, getattr(fs_event, "dest_path", "")]
        return any(c and Path(c).resolve() == self.path for c in candidates)

    def on_any_event(self, fs_event):
        if fs_event.is_directory or fs_event.event_type not in ("modified", "created", "moved"):
            return
        if not self._targets_document(fs_event):
            return
        if not self._debounce(self.path):
            return
        try:
            self.on_change(self.path)
        except Exception:
            logger.exception(f"Change handler failed for {self.path}")


def watch_document(
    path,
    on_change: Callable[[Path], None],
    debounce_ms: int = 300,
    stop: Optional[threading.Event] = None,
) -> None:
    """Block, calling on_change for each change to `path`, until Ctrl+C or `stop` is set."""
    handler = DocumentChangeHandler(path, on_change, debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(handler.path.parent), recursive=False)
    observer.start()
    logger.info(f"Watching {handler.path}")

    try:
        while not (stop and stop.is_set()):
            time.sleep(0.2)
    except KeyboardInterrupt:
        logger.info("Stopping watcher")
    finally:
        observer.stop()
        observer.join()
