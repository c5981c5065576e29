"""Tests for write-failure notifications."""
from unittest.mock import patch, MagicMock

import requests

from inline_kanban.notifier import Notifier


def test_without_url_only_logs(caplog, capsys):
    with patch("inline_kanban.notifier.requests.post") as post:
        assert Notifier().notify("Kanban update failed", "notes.md (block 0): denied") is False
    post.assert_not_called()
    assert "notes.md (block 0): denied" in caplog.text
    assert "Kanban update failed" in capsys.readouterr().err


def test_posts_to_webhook():
    response = MagicMock(ok=True)
    with patch("inline_kanban.notifier.requests.post", return_value=response) as post:
        assert Notifier("http://hook", timeout=1.0).notify("t", "m") is True
    url = post.call_args[0][0]
    body = post.call_args[1]["json"]
    assert url == "http://hook"
    assert (body["title"], body["message"]) == ("t", "m")
    assert post.call_args[1]["timeout"] == 1.0


def test_webhook_errors_never_raise():
    with patch("inline_kanban.notifier.requests.post", side_effect=requests.ConnectionError("down")):
        assert Notifier("http://hook").notify("t", "m") is False
    with patch("inline_kanban.notifier.requests.post", return_value=MagicMock(ok=False, status_code=500)):
        assert Notifier("http://hook").notify("t", "m") is False
