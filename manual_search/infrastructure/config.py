from __future__ import annotations

import os
from typing import Optional

MANUAL_COLLECTION_NAME = "manuals"
SEED_FILE_NAME = "manual-chunks.json"


def env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    try:
        return int(env_str(name, str(default)))
    except ValueError:
        return default


def qdrant_url() -> str:
    return env_str("QDRANT_URL", "http://localhost:6333").rstrip("/")


def ollama_url() -> str:
    return env_str("OLLAMA_URL", "http://localhost:11434").rstrip("/")


def embed_model() -> str:
    return env_str("EMBED_MODEL", "all-minilm")


def embed_dim() -> Optional[int]:
    """
    Fixed collection dimension from MANUAL_EMBED_DIM.
    Returns None when unset or invalid; the seed import then uses the first row's dimension.
    """
    raw = os.getenv("MANUAL_EMBED_DIM", "").strip()
    try:
        dim = int(raw)
    except ValueError:
        return None
    return dim if dim > 0 else None


def search_limit() -> int:
    return max(1, env_int("MANUAL_SEARCH_LIMIT", 3))


def import_batch_size() -> int:
    return max(1, env_int("MANUAL_IMPORT_BATCH_SIZE", 1000))
