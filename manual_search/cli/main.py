from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict, Optional, Sequence

from ..api import ProductManualSemanticSearch, ensure_seed_data_imported
from ..domain.models import MemoryQueryResult
from ..infrastructure.config import MANUAL_COLLECTION_NAME
from ..infrastructure.logging import get_logger
from ..infrastructure.ollama.client import OllamaEmbeddingService
from ..infrastructure.qdrant.client import QdrantVectorStore
from .parsers import build_parser

logger = get_logger("manual_search.cli")


def run(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))

    emb = OllamaEmbeddingService()
    store = QdrantVectorStore()

    try:
        return dispatch_commands(ns, emb, store)
    except Exception as ex:  # keep CLI concise and user-friendly
        logger.debug("Command failed | cmd=%s", ns.cmd, exc_info=True)
        print(json.dumps({"status": "error", "error": f"{type(ex).__name__}: {ex}"}))
        return 3


def dispatch_commands(ns, emb, store) -> int:
    """
    Dispatches CLI commands.

    Commands:
    - search: embed --q and search the manuals collection filtered to --product-id
    - import-seed: one-time bulk import of manual-chunks.json into an empty store
    - list-collections: show collections currently present in Qdrant
    """
    if ns.cmd == "search":
        return search_manuals(ns, emb, store)
    if ns.cmd == "import-seed":
        return import_seed(ns, emb, store)
    if ns.cmd == "list-collections":
        print(json.dumps({"status": "ok", "collections": store.list_collections()}, indent=2))
        return 0

    print(json.dumps({"status": "error", "error": f"Unknown command: {ns.cmd}"}))
    return 2


def _serialize_result(result: MemoryQueryResult) -> Dict[str, Any]:
    """Convert a search match into a JSON-serializable mapping (embedding omitted)."""
    return {
        "id": result.metadata.id,
        "text": result.metadata.text,
        "relevance": float(result.relevance),
        "is_reference": result.metadata.is_reference,
    }


def search_manuals(ns, emb, store) -> int:
    limit = getattr(ns, "limit", None)
    if limit is not None and int(limit) < 1:
        print(json.dumps({"status": "error", "error": "--limit must be >= 1"}))
        return 2
    results = ProductManualSemanticSearch(emb, store).search(int(ns.product_id), str(ns.q), limit)
    print(
        json.dumps(
            {
                "status": "ok",
                "collection": MANUAL_COLLECTION_NAME,
                "product_id": int(ns.product_id),
                "result": [_serialize_result(r) for r in results],
            },
            indent=2,
        )
    )
    return 0


def import_seed(ns, emb, store) -> int:
    batch_size = getattr(ns, "batch_size", None)
    if batch_size is not None and int(batch_size) < 1:
        print(json.dumps({"status": "error", "error": "--batch-size must be >= 1"}))
        return 2
    resp = ensure_seed_data_imported(
        embeddings=emb,
        store=store,
        directory=getattr(ns, "dir", None),
        batch_size=batch_size,
        dim=getattr(ns, "dim", None),
    )
    print(json.dumps(asdict(resp), indent=2))
    return 0


def main() -> int:
    import sys
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
