from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Product manual semantic search (Ollama + Qdrant)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Search one product's manual
    se = sub.add_parser("search")
    se.add_argument("--product-id", type=int, required=True)
    se.add_argument("--q", required=True)
    se.add_argument("--limit", type=int, default=None, help="Max hits; defaults to $MANUAL_SEARCH_LIMIT or 3")

    # One-time bulk import of precomputed embeddings
    im = sub.add_parser("import-seed")
    im.add_argument("--dir", required=False, help="Directory holding manual-chunks.json; defaults to $ImportInitialDataDir")
    im.add_argument("--batch-size", type=int, default=None, help="Upsert batch size; defaults to $MANUAL_IMPORT_BATCH_SIZE or 1000")
    im.add_argument("--dim", type=int, default=None, help="Collection dimension; defaults to $MANUAL_EMBED_DIM or the first seed row")

    sub.add_parser("list-collections")

    return ap
