from __future__ import annotations

import itertools
import uuid
from typing import Dict, Iterable, List

from ..dto import SeedImportRequest, SeedImportResponse
from ...domain.errors import ContractError
from ...domain.interfaces import EmbeddingService, VectorStore
from ...domain.models import ManualChunk, MemoryRecord, MemoryRecordMetadata, Point, product_tag
from ...infrastructure.config import SEED_FILE_NAME
from ...infrastructure.logging import get_logger
from ...ingestion.batching import read_chunked
from ...ingestion.manual_chunks_loader import iter_manual_chunks

logger = get_logger("manual_search.seed")


def _make_uuid(collection: str, record_id: str) -> str:
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{collection}|{record_id}"))


def to_memory_record(chunk: ManualChunk) -> MemoryRecord:
    record_id = str(chunk.paragraph_id)
    metadata = MemoryRecordMetadata(
        is_reference=False,
        id=record_id,
        text=chunk.text,
        additional_metadata=product_tag(chunk.product_id),
    )
    return MemoryRecord(metadata=metadata, embedding=chunk.embedding, key=record_id)


def to_point(collection: str, record: MemoryRecord, dim: int) -> Point:
    md = record.metadata
    if record.embedding is None:
        raise ContractError(f"Record {md.id} has no embedding")
    if record.embedding.dim != dim:
        raise ContractError(f"Record {md.id} has dim={record.embedding.dim}, expected={dim}")
    payload: Dict[str, object] = {
        "id": md.id,
        "text": md.text,
        "description": md.description,
        "external_source_name": md.external_source_name,
        "additional_metadata": md.additional_metadata,
        "is_reference": md.is_reference,
    }
    return Point(id=_make_uuid(collection, md.id), vector=record.embedding, payload=payload)


class ImportSeedDataUseCase:
    """Use-case: one-time bulk import of precomputed manual embeddings.

    Skips entirely when the store already holds any collection; otherwise creates the
    manuals collection and upserts the seed file in fixed-size batches.
    """

    def __init__(self, embeddings: EmbeddingService, store: VectorStore) -> None:
        self._emb = embeddings
        self._store = store

    def execute(self, req: SeedImportRequest) -> SeedImportResponse:
        if self._store.has_collections():
            logger.info("Seed import skipped | reason=collections-exist")
            return SeedImportResponse(status="already-seeded", collection=req.collection)

        seed_path = req.directory / SEED_FILE_NAME
        chunks = iter_manual_chunks(seed_path)
        # The first row must decode and match before the collection is created.
        first = next(chunks, None)
        if first is None:
            dim = int(req.dim or self._emb.get_dimension())
        else:
            dim = int(req.dim or first.embedding.dim)
            if first.embedding.dim != dim:
                raise ContractError(
                    f"Seed row {first.paragraph_id} has dim={first.embedding.dim}, expected={dim}"
                )
            chunks = itertools.chain([first], chunks)
        self._store.ensure_collection(req.collection, dim, req.distance)

        records = 0
        batches = 0
        for batch in read_chunked((to_memory_record(c) for c in chunks), req.batch_size):
            self._upsert_batch(req.collection, batch, dim)
            batches += 1
            records += len(batch)
            logger.info(
                "Seed import batch | collection=%s | batch=%d | records=%d",
                req.collection,
                batches,
                len(batch),
            )

        logger.info(
            "Seed import completed | collection=%s | file=%s | records=%d | batches=%d",
            req.collection,
            seed_path,
            records,
            batches,
        )
        return SeedImportResponse(status="imported", collection=req.collection, records=records, batches=batches)

    def _upsert_batch(self, collection: str, batch: Iterable[MemoryRecord], dim: int) -> None:
        points: List[Point] = [to_point(collection, r, dim) for r in batch]
        self._store.upsert_points(collection, points)
