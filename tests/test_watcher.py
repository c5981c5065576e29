"""Tests for the debounced document change handler."""
import threading
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from inline_kanban.watcher import DocumentChangeHandler, watch_document


def _event(event_type, src, dest="", is_directory=False):
    return SimpleNamespace(event_type=event_type, src_path=str(src), dest_path=str(dest), is_directory=is_directory)


def test_modification_of_document_fires(markdown_file):
    on_change = MagicMock()
    handler = DocumentChangeHandler(markdown_file, on_change, debounce_ms=0)
    handler.on_any_event(_event("modified", markdown_file))
    on_change.assert_called_once_with(markdown_file.resolve())


def test_other_files_and_directories_are_ignored(markdown_file, tmp_path):
    on_change = MagicMock()
    handler = DocumentChangeHandler(markdown_file, on_change, debounce_ms=0)
    handler.on_any_event(_event("modified", tmp_path / "other.md"))
    handler.on_any_event(_event("modified", tmp_path, is_directory=True))
    handler.on_any_event(_event("deleted", markdown_file))
    on_change.assert_not_called()


def test_atomic_save_by_rename_fires(markdown_file, tmp_path):
    on_change = MagicMock()
    handler = DocumentChangeHandler(markdown_file, on_change, debounce_ms=0)
    handler.on_any_event(_event("moved", tmp_path / ".notes.md.swp", dest=markdown_file))
    on_change.assert_called_once()


def test_bursts_are_debounced(markdown_file):
    on_change = MagicMock()
    handler = DocumentChangeHandler(markdown_file, on_change, debounce_ms=300)
    with patch("inline_kanban.watcher.time.monotonic", side_effect=[10.0, 10.1, 10.5]):
        for _ in range(3):
            handler.on_any_event(_event("modified", markdown_file))
    assert on_change.call_count == 2


def test_callback_errors_are_logged_not_raised(markdown_file, caplog):
    handler = DocumentChangeHandler(markdown_file, MagicMock(side_effect=ValueError("boom")), debounce_ms=0)
    handler.on_any_event(_event("modified", markdown_file))
    assert "Change handler failed" in caplog.text


def test_watch_document_stops_on_event(markdown_file):
    stop = threading.Event()
    stop.set()
    with patch("inline_kanban.watcher.Observer") as observer_cls:
        watch_document(markdown_file, MagicMock(), stop=stop)
    observer = observer_cls.return_value
    observer.schedule.assert_called_once()
    observer.stop.assert_called_once()
    observer.join.assert_called_once()
