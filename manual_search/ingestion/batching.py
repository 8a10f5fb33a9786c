from __future__ import annotations

from typing import Iterable, Iterator, List, TypeVar

T = TypeVar("T")


def read_chunked(source: Iterable[T], size: int) -> Iterator[List[T]]:
    """Group ``source`` into lists of ``size`` items, flushing a shorter final group.

    Args:
        source: Any iterable; consumed lazily, one group at a time.
        size: Group length. Must be at least ``1``.

    Returns:
        Iterator[List[T]]: Full groups in source order, then the remainder (if any).
        An empty source yields nothing.

    Raises:
        ValueError: If ``size`` is less than ``1``.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be >= 1, got {size}")
    return _chunks(source, size)


def _chunks(source: Iterable[T], size: int) -> Iterator[List[T]]:
    buffer: List[T] = []
    for item in source:
        buffer.append(item)
        if len(buffer) == size:
            yield buffer
            buffer = []
    if buffer:
        yield buffer
