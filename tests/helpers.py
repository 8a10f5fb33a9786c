"""Builders for seed-file rows shared across test modules."""

import base64
import struct


def encode_embedding(values):
    """Base64 of little-endian float32 values, as written by the seed exporter."""
    return base64.b64encode(struct.pack(f"<{len(values)}f", *values)).decode("ascii")


def seed_entry(paragraph_id, product_id, text, values=(0.5, 0.25, -1.0)):
    return {
        "ParagraphId": paragraph_id,
        "ProductId": product_id,
        "Text": text,
        "Embedding": encode_embedding(list(values)),
    }
