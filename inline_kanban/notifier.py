"""
Write-failure notifications.

Failures are always logged and printed. If a webhook URL is configured the
notice is also POSTed there as JSON. Never raises.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class Notifier:
    """Surfaces errors the user has to act on (a board edit that was not saved)."""

    def __init__(self, url: Optional[str] = None, timeout: float = 2.0):
        self.url = url
        self.timeout = timeout

    def notify(self, title: str, message: str) -> bool:
        """Report a problem. Returns True if the webhook accepted it."""
        logger.error(f"{title}: {message}")
        print(f"  [!] {title}: {message}", file=sys.stderr)

        if not self.url:
            return False

        try:
            r = requests.post(
                self.url,
                json={
                    "title": title,
                    "message": message,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
                timeout=self.timeout,
            )
            if r.ok:
                return True
            logger.warning(f"Notification webhook returned HTTP {r.status_code}")
        except requests.RequestException as e:
            logger.warning(f"Notification webhook unreachable: {e}")
        return False
