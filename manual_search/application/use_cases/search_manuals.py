from __future__ import annotations

from typing import List

from ..dto import SearchRequest
from ...domain.interfaces import EmbeddingService, VectorStore
from ...domain.models import MemoryQueryResult, MemoryRecordMetadata, QueryResult, product_tag

RETURNED_FIELDS = ("id", "text")


def product_filter(product_id: int) -> dict:
    """Qdrant payload filter restricting hits to one product's manual."""
    return {"must": [{"key": "additional_metadata", "match": {"value": product_tag(product_id)}}]}


def to_memory_query_result(hit: QueryResult) -> MemoryQueryResult:
    payload = hit.payload or {}
    metadata = MemoryRecordMetadata(
        is_reference=True,
        id=str(payload.get("id", "")),
        text=str(payload.get("text", "")),
    )
    return MemoryQueryResult(metadata=metadata, relevance=hit.score, embedding=None)


class SearchManualsUseCase:
    """Use-case: embed query string and search one product's manual paragraphs."""

    def __init__(self, embeddings: EmbeddingService, store: VectorStore) -> None:
        self._emb = embeddings
        self._store = store

    def execute(self, req: SearchRequest) -> List[MemoryQueryResult]:
        vec = self._emb.embed_texts([req.query])[0]
        hits = self._store.search(
            name=req.collection,
            vector=vec,
            limit=req.limit,
            with_payload=list(RETURNED_FIELDS),
            query_filter=product_filter(req.product_id),
        )
        return [to_memory_query_result(h) for h in hits]
