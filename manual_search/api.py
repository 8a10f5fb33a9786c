from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

from .application.dto import SearchRequest, SeedImportRequest, SeedImportResponse
from .application.use_cases.import_seed_data import ImportSeedDataUseCase
from .application.use_cases.search_manuals import SearchManualsUseCase
from .domain.interfaces import EmbeddingService, VectorStore
from .domain.models import MemoryQueryResult
from .infrastructure.config import MANUAL_COLLECTION_NAME, embed_dim, import_batch_size, search_limit
from .infrastructure.logging import get_logger
from .infrastructure.ollama.client import OllamaEmbeddingService
from .infrastructure.qdrant.client import QdrantVectorStore

logger = get_logger("manual_search.api")

IMPORT_DIR_ENV = "ImportInitialDataDir"


def _dotenv_value(raw: str) -> str:
    """Unquote a .env value; unquoted values drop a trailing `` # comment``."""
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value.split(" #", 1)[0].rstrip()


def _parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse KEY=VALUE lines from a .env file; ``export`` prefixes and ``#`` comments are allowed."""
    if not dotenv_path.is_file():
        return {}
    try:
        lines = dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines()
    except OSError:
        return {}
    env: Dict[str, str] = {}
    for line in lines:
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        env[key] = _dotenv_value(value)
    return env


def _env_get(key: str) -> Optional[str]:
    """Process env wins; blank or missing values fall back to ./.env."""
    value = os.getenv(key, "").strip()
    if not value:
        value = _parse_dotenv(Path(".env")).get(key, "").strip()
    return value or None


class ProductManualSemanticSearch:
    """Product-manual search over the ``manuals`` collection.

    Both collaborators default to the Ollama and Qdrant REST adapters configured
    from the environment.
    """

    def __init__(
        self,
        embeddings: Optional[EmbeddingService] = None,
        store: Optional[VectorStore] = None,
    ) -> None:
        self._emb = embeddings or OllamaEmbeddingService()
        self._store = store or QdrantVectorStore()

    def search(self, product_id: int, query: str, limit: Optional[int] = None) -> List[MemoryQueryResult]:
        """Return the closest manual paragraphs for ``product_id``, best match first."""
        req = SearchRequest(
            product_id=int(product_id),
            query=query,
            limit=int(limit or search_limit()),
            collection=MANUAL_COLLECTION_NAME,
        )
        logger.debug("Search | product_id=%d | limit=%d", req.product_id, req.limit)
        return SearchManualsUseCase(self._emb, self._store).execute(req)


def ensure_seed_data_imported(
    embeddings: Optional[EmbeddingService] = None,
    store: Optional[VectorStore] = None,
    directory: Optional[str] = None,
    batch_size: Optional[int] = None,
    dim: Optional[int] = None,
) -> SeedImportResponse:
    """
    Import manual-chunks.json from ImportInitialDataDir into an empty vector store.

    Meant to run once at startup. Returns status "skipped" when no import directory is
    configured and "already-seeded" when the store holds any collection.
    """
    import_dir = directory or _env_get(IMPORT_DIR_ENV)
    if not import_dir:
        logger.info("Seed import skipped | reason=%s not set", IMPORT_DIR_ENV)
        return SeedImportResponse(status="skipped", collection=MANUAL_COLLECTION_NAME)

    req = SeedImportRequest(
        directory=Path(import_dir).expanduser(),
        batch_size=int(batch_size or import_batch_size()),
        dim=dim or embed_dim(),
        collection=MANUAL_COLLECTION_NAME,
    )
    return ImportSeedDataUseCase(embeddings or OllamaEmbeddingService(), store or QdrantVectorStore()).execute(req)
