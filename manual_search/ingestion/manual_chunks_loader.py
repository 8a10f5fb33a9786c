from __future__ import annotations

import base64
import binascii
import codecs
import itertools
import struct
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional

import ijson

from ..domain.errors import ContractError, SeedDataError
from ..domain.models import ManualChunk, Vector

_FIELD_ALIASES: Dict[str, tuple] = {
    "paragraph_id": ("ParagraphId", "paragraphId", "paragraph_id"),
    "product_id": ("ProductId", "productId", "product_id"),
    "text": ("Text", "text"),
    "embedding": ("Embedding", "embedding"),
}


def _field(entry: dict, name: str, index: int) -> object:
    for key in _FIELD_ALIASES[name]:
        if key in entry and entry[key] is not None:
            return entry[key]
    raise ContractError(f"Seed entry {index} is missing '{_FIELD_ALIASES[name][0]}'")


def decode_embedding(raw: object) -> Vector:
    """Decode a seed embedding into a Vector.

    Accepts base64 text holding little-endian float32 values (the layout the seed
    exporter writes) or a plain list of numbers.
    """
    if isinstance(raw, list):
        values = [float(x) for x in raw]
    elif isinstance(raw, str):
        try:
            blob = base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ContractError(f"Embedding is not valid base64: {exc}") from exc
        if len(blob) % 4:
            raise ContractError(f"Embedding byte length {len(blob)} is not a multiple of 4")
        values = list(struct.unpack(f"<{len(blob) // 4}f", blob))
    else:
        raise ContractError("Embedding must be base64 text or a list of numbers")
    if not values:
        raise ContractError("Embedding is empty")
    return Vector(values=values, dim=len(values))


def parse_manual_chunk(entry: object, index: int = 0) -> ManualChunk:
    if not isinstance(entry, dict):
        raise ContractError(f"Seed entry {index} must be an object")
    try:
        paragraph_id = int(_field(entry, "paragraph_id", index))
        product_id = int(_field(entry, "product_id", index))
    except (TypeError, ValueError) as exc:
        raise ContractError(f"Seed entry {index} has a non-integer id: {exc}") from exc
    text = _field(entry, "text", index)
    if not isinstance(text, str):
        raise ContractError(f"Seed entry {index} 'Text' must be a string")
    return ManualChunk(
        paragraph_id=paragraph_id,
        product_id=product_id,
        text=text,
        embedding=decode_embedding(_field(entry, "embedding", index)),
    )


def _open_array(path: Path) -> BinaryIO:
    """Open ``path`` positioned at the opening ``[`` of its top-level JSON array."""
    if not path.is_file():
        raise SeedDataError(f"Seed file '{path}' not found")
    fh = path.open("rb")
    try:
        if fh.read(len(codecs.BOM_UTF8)) != codecs.BOM_UTF8:
            fh.seek(0)
        ch = fh.read(1)
        while ch and ch.isspace():
            ch = fh.read(1)
        if ch != b"[":
            raise SeedDataError(f"Seed file '{path}' must contain a JSON array")
        fh.seek(fh.tell() - 1)
    except Exception:
        fh.close()
        raise
    return fh


def _stream_entries(fh: BinaryIO, path: Path) -> Iterator[object]:
    with fh:
        try:
            yield from ijson.items(fh, "item", use_float=True)
        except ijson.JSONError as exc:
            raise SeedDataError(f"Invalid JSON in seed file '{path}': {exc}") from exc


def iter_manual_chunks(path: Path, max_items: Optional[int] = None) -> Iterator[ManualChunk]:
    """Yield ManualChunk rows from a seed JSON file in file order.

    Existence and the top-level array are checked on call; rows are parsed from the
    file only as the caller consumes them, so one batch is in memory at a time.
    """
    entries: Iterator[object] = _stream_entries(_open_array(path), path)
    if max_items is not None:
        entries = itertools.islice(entries, int(max_items))
    return (parse_manual_chunk(entry, i) for i, entry in enumerate(entries))
