"""
Outline Kernel configuration — all environment variables in one place.

Read from environment at import time. The kernel itself has no secrets and no IO;
these only tune logging, memoization and undo depth.
"""

from __future__ import annotations

import logging
import os


class Settings:
    """Kernel settings from environment variables."""

    # Logging
    LOG_LEVEL: str = os.environ.get("OUTLINE_LOG_LEVEL", "WARNING")

    # Memoized replay (reducer.replay_cached)
    REPLAY_CACHE_SIZE: int = int(os.environ.get("OUTLINE_REPLAY_CACHE_SIZE", "128"))

    # Undo depth kept by OutlineDocument; 0 means unlimited
    HISTORY_LIMIT: int = int(os.environ.get("OUTLINE_HISTORY_LIMIT", "0"))


settings = Settings()


def configure_logging(config: Settings = settings) -> None:
    """Apply LOG_LEVEL to the `outline` logger tree. Leaves the root logger alone."""
    level = logging.getLevelName(config.LOG_LEVEL.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown OUTLINE_LOG_LEVEL: {config.LOG_LEVEL}")
    logging.getLogger("outline").setLevel(level)
