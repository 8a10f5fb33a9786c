from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Union
import requests

from ...domain.errors import ContractError, VectorStoreError
from ...domain.interfaces import VectorStore
from ...domain.models import Vector, Point, QueryResult
from ..logging import get_logger
from ..timeouts import http_timeout_seconds
from ..config import qdrant_url

logger = get_logger("manual_search.qdrant")


def _collection_size(data: dict) -> Optional[int]:
    """Extract the configured vector size from a GET /collections/{name} body."""
    try:
        params = data["result"]["config"]["params"]["vectors"]
    except (KeyError, TypeError):
        return None
    if isinstance(params, dict) and "size" in params:
        return int(params["size"])
    return None


class QdrantVectorStore(VectorStore):
    """Vector store adapter for Qdrant REST."""

    def __init__(self, base_url: Optional[str] = None) -> None:
        self._base = (base_url or qdrant_url()).rstrip("/")

    def list_collections(self) -> List[str]:
        """List collection names present in Qdrant."""
        timeout = http_timeout_seconds()
        r = requests.get(f"{self._base}/collections", timeout=timeout)
        r.raise_for_status()
        data = r.json() or {}
        cols = []
        for it in ((data.get("result") or {}).get("collections") or []):
            name = str(it.get("name", "")).strip()
            if name:
                cols.append(name)
        return cols

    def create_collection(self, name: str, dim: int, distance: str = "Cosine") -> None:
        timeout = http_timeout_seconds()
        r = requests.put(
            f"{self._base}/collections/{name}",
            json={"vectors": {"size": int(dim), "distance": distance}},
            timeout=timeout,
        )
        r.raise_for_status()
        logger.info("Collection created | collection=%s | dim=%d | distance=%s", name, dim, distance)

    def ensure_collection(self, name: str, dim: int, distance: str = "Cosine") -> None:
        timeout = http_timeout_seconds()
        r = requests.get(f"{self._base}/collections/{name}", timeout=timeout)
        if r.status_code == 404:
            self.create_collection(name, dim, distance)
            return
        r.raise_for_status()
        existing = _collection_size(r.json() or {})
        if existing is not None and existing != dim:
            raise ContractError(f"Collection {name} has size={existing}, expected={dim}")

    def upsert_points(self, name: str, points: List[Point]) -> dict:
        timeout = http_timeout_seconds()
        body = {
            "points": [
                {"id": p.id, "vector": p.vector.values, "payload": p.payload}
                for p in points
            ]
        }
        r = requests.put(f"{self._base}/collections/{name}/points?wait=true", json=body, timeout=timeout)
        r.raise_for_status()
        return r.json()

    def search(
        self,
        name: str,
        vector: Vector,
        limit: int = 3,
        with_payload: Union[bool, Sequence[str]] = True,
        query_filter: Optional[Dict[str, object]] = None,
    ) -> List[QueryResult]:
        timeout = http_timeout_seconds()
        body: Dict[str, object] = {
            "vector": vector.values,
            "with_payload": with_payload if isinstance(with_payload, bool) else list(with_payload),
            "limit": int(limit),
        }
        if query_filter:
            body["filter"] = query_filter

        r = requests.post(f"{self._base}/collections/{name}/points/search", json=body, timeout=timeout)
        r.raise_for_status()
        data = r.json()
        if not isinstance(data, dict) or not isinstance(data.get("result"), list):
            raise VectorStoreError(f"Search response for collection {name} has no result list")
        return [
            QueryResult(
                id=str(it.get("id")),
                score=float(it.get("score", 0.0)),
                payload=it.get("payload") or {},
            )
            for it in data["result"]
        ]
