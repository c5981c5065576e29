# Inline kanban: configuration
# Defaults can be overridden from a YAML file, environment variables or CLI flags.

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("~/.config/inline-kanban/config.yaml")


@dataclass
class Config:
    """Runtime configuration."""

    # Info string of fenced blocks that hold boards
    fence_language: str = "kanban"

    # UI affordances
    highlight_ttl_secs: float = 1.5

    # Write-failure notifications (None = log only)
    notify_url: Optional[str] = None
    notify_timeout_secs: float = 2.0

    # Watcher
    debounce_ms: int = 300

    log_level: str = "INFO"

    def apply_env(self) -> None:
        """Environment overrides: INLINE_KANBAN_NOTIFY_URL, INLINE_KANBAN_LOG_LEVEL."""
        url = os.environ.get("INLINE_KANBAN_NOTIFY_URL")
        if url:
            self.notify_url = url
        level = os.environ.get("INLINE_KANBAN_LOG_LEVEL")
        if level:
            self.log_level = level.upper()

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML, falling back to defaults."""
        cfg_path = Path(path or os.environ.get("INLINE_KANBAN_CONFIG") or CONFIG_PATH).expanduser()
        known = {f.name for f in fields(cls)}
        cfg = cls()
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in known})
            except (OSError, yaml.YAMLError, AttributeError, TypeError) as e:
                logger.warning(f"Ignoring config {cfg_path}: {e}")
                cfg = cls()
        cfg.apply_env()
        return cfg
