from __future__ import annotations

from typing import List

from .models import CHUNK_COLORS, Chunk, ChunkConfig

__all__ = ["CHUNK_COLORS", "chunk_text"]


def chunk_text(total_chars: int, config: ChunkConfig) -> List[Chunk]:
    """Split ``total_chars`` characters into overlapping fixed-size windows.

    Every chunk spans ``config.chunk_size`` characters except possibly the
    last one, and consecutive chunks share exactly ``config.overlap``
    characters. The windows cover ``[0, total_chars)`` without gaps.
    """

    if total_chars < 0:
        raise ValueError("total_chars must be a non-negative integer")
    if config.chunk_size <= 0:
        raise ValueError("chunk_size must be a positive integer")
    if config.overlap < 0:
        raise ValueError("overlap must be a non-negative integer")
    if config.step <= 0:
        raise ValueError("overlap must be smaller than chunk_size")
    if total_chars == 0:
        return []

    chunks: List[Chunk] = []
    start = 0
    index = 0

    while True:
        end = min(start + config.chunk_size, total_chars)
        chunks.append(Chunk(index=index, start=start, end=end, color_index=index % len(CHUNK_COLORS)))

        if end == total_chars:
            break

        start += config.step
        index += 1

    return chunks
