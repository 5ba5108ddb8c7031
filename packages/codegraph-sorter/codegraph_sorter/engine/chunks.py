"""
Chunk extraction: split top-level statements into runs that may be reordered.
"""

from typing import Callable

from codegraph_sorter.common.exceptions import UnknownChunkPlacement
from codegraph_sorter.models import ChunkPlacement, Statement

Chunk = list[Statement]
ChunkClassifier = Callable[[Statement, Statement | None], ChunkPlacement]


def extract_chunks(statements: list[Statement], classify: ChunkClassifier) -> list[Chunk]:
    """
    Partition statements into maximal reorderable runs.

    Args:
        statements: Top-level statements in source order
        classify: Called with each statement and the one before it (None for the first)

    Returns:
        Non-empty chunks in source order

    Raises:
        UnknownChunkPlacement: If `classify` returns anything but a ChunkPlacement
    """
    chunks: list[Chunk] = []
    chunk: Chunk = []
    previous: Statement | None = None

    for statement in statements:
        placement = classify(statement, previous)

        if placement is ChunkPlacement.NOT_PART_OF_CHUNK:
            if chunk:
                chunks.append(chunk)
                chunk = []
        elif placement is ChunkPlacement.PART_OF_CHUNK:
            chunk.append(statement)
        elif placement is ChunkPlacement.PART_OF_NEW_CHUNK:
            if chunk:
                chunks.append(chunk)
            chunk = [statement]
        else:
            raise UnknownChunkPlacement(f"Unknown chunk result: {placement!r}", {"line": statement.start_line})

        previous = statement

    if chunk:
        chunks.append(chunk)

    return chunks
