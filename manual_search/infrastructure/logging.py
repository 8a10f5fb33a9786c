from __future__ import annotations

import logging
import os

DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def log_level(default: int = logging.INFO) -> int:
    """Level from MANUAL_SEARCH_LOG_LEVEL, given as a name ("debug") or a number ("10")."""
    raw = os.getenv("MANUAL_SEARCH_LOG_LEVEL", "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=log_level(), format=os.getenv("MANUAL_SEARCH_LOG_FORMAT", DEFAULT_FORMAT))
    return logger
