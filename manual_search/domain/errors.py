from __future__ import annotations


class EmbeddingError(RuntimeError):
    """Raised when embedding provider fails."""


class VectorStoreError(RuntimeError):
    """Raised when vector store returns a response we cannot read."""


class ContractError(ValueError):
    """Raised when input violates documented contract (e.g., seed row shape, dimension)."""


class SeedDataError(RuntimeError):
    """Raised when the seed data file is missing or not a JSON array."""
