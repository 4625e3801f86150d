"""Deterministic partitioning of a file into chunk byte ranges."""

from typing import List

from uploader.types import ChunkRange


def chunk_range(index: int, chunk_size: int, file_size: int) -> ChunkRange:
    """
    Map a 1-based chunk index to its byte range.

    Args:
        index: Chunk number, starting at 1
        chunk_size: Server-declared chunk size in bytes
        file_size: Total file size in bytes

    Returns:
        ChunkRange with offset (index-1)*chunk_size; the last chunk may be shorter
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    offset = (index - 1) * chunk_size
    if index < 1 or offset >= file_size:
        raise ValueError(f"Chunk {index} is outside a file of {file_size} bytes")
    return ChunkRange(index=index, offset=offset, length=min(chunk_size, file_size - offset))


def build_chunk_plan(file_size: int, chunk_size: int) -> List[ChunkRange]:
    """
    Build the ordered chunk plan 1..ceil(file_size / chunk_size).

    Args:
        file_size: Total file size in bytes
        chunk_size: Server-declared chunk size in bytes

    Returns:
        Contiguous, non-overlapping ranges whose lengths sum to file_size
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    total_chunks = -(-file_size // chunk_size)
    return [chunk_range(i, chunk_size, file_size) for i in range(1, total_chunks + 1)]
