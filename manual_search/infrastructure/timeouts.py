from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TimeoutConfig:
    http_seconds: float = 15.0


def get_timeout_config(default: float = 15.0) -> TimeoutConfig:
    try:
        seconds = float(os.getenv("MANUAL_SEARCH_HTTP_TIMEOUT", str(default)))
    except ValueError:
        seconds = default
    return TimeoutConfig(http_seconds=seconds if seconds > 0 else default)


def http_timeout_seconds() -> float:
    return get_timeout_config().http_seconds
