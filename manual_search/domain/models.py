from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


def product_tag(product_id: int) -> str:
    """Tag stored in ``additional_metadata`` and matched by product-scoped searches."""
    return f"productid:{product_id}"


@dataclass(frozen=True)
class Vector:
    """Embedding vector with explicit dimension.

    Fields:
        values: The numeric embedding.
        dim: Dimension; validated by application/use-cases.
    """
    values: List[float]
    dim: int


@dataclass(frozen=True)
class ManualChunk:
    """A single paragraph of a product manual with its precomputed embedding.

    Fields:
        paragraph_id: Stable paragraph identifier; becomes the record id.
        product_id: Owning product; becomes the ``productid:<n>`` tag.
        text: Paragraph text.
        embedding: Precomputed embedding vector.
    """
    paragraph_id: int
    product_id: int
    text: str
    embedding: Vector


@dataclass(frozen=True)
class MemoryRecordMetadata:
    """Generic record metadata, stored as the point payload.

    Fields:
        is_reference: True for search results, False for imported source records.
        id: Record id (the paragraph id as text).
        text: Paragraph text.
        description: Unused; kept empty.
        external_source_name: Unused; kept empty.
        additional_metadata: The ``productid:<n>`` tag searches filter on.
    """
    is_reference: bool
    id: str
    text: str
    description: str = ""
    external_source_name: str = ""
    additional_metadata: str = ""


@dataclass(frozen=True)
class MemoryRecord:
    """A record to be stored: metadata plus its embedding."""
    metadata: MemoryRecordMetadata
    embedding: Optional[Vector]
    key: Optional[str] = None


@dataclass(frozen=True)
class MemoryQueryResult:
    """Search match returned to callers.

    Fields:
        metadata: Record metadata rebuilt from the returned payload.
        relevance: Similarity score (store-defined; higher is better for cosine).
        embedding: Always None for search results; vectors are not requested.
    """
    metadata: MemoryRecordMetadata
    relevance: float
    embedding: Optional[Vector] = None


@dataclass(frozen=True)
class Point:
    """A point to upsert into the vector store.

    Fields:
        id: Qdrant-valid ID (UUID or uint64).
        vector: Embedding vector (default unnamed vector).
        payload: Record metadata fields.
    """
    id: str
    vector: Vector
    payload: Dict[str, object]


@dataclass(frozen=True)
class QueryResult:
    """Vector search hit as returned by the store.

    Fields:
        id: Point ID.
        score: Similarity score.
        payload: Returned payload (only the requested fields).
    """
    id: str
    score: float
    payload: Dict[str, object]
