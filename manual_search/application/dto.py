from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..infrastructure.config import MANUAL_COLLECTION_NAME


@dataclass(frozen=True)
class SearchRequest:
    product_id: int
    query: str
    limit: int = 3
    collection: str = MANUAL_COLLECTION_NAME


@dataclass(frozen=True)
class SeedImportRequest:
    directory: Path
    batch_size: int = 1000
    dim: Optional[int] = None
    collection: str = MANUAL_COLLECTION_NAME
    distance: str = "Cosine"


@dataclass(frozen=True)
class SeedImportResponse:
    status: str
    collection: str
    records: int = 0
    batches: int = 0
