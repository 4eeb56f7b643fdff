"""Logical line reader for config streams."""

from __future__ import annotations

from typing import Iterator, TextIO


def iter_logical_lines(stream: TextIO, chunk_size: int = 256) -> Iterator[str]:
    """Yield complete lines from a text stream, however long they are.

    Each read returns at most ``chunk_size`` characters; reads that stop
    short of a newline are appended to the same line until a newline or
    end of stream is reached. A trailing chunk without a newline is
    yielded as the final line.

    Args:
        stream: Readable text stream
        chunk_size: Maximum characters requested per read

    Yields:
        Logical lines, including their trailing newline when present
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    parts: list[str] = []
    while True:
        chunk = stream.readline(chunk_size)
        if not chunk:
            break
        parts.append(chunk)
        if chunk.endswith("\n"):
            yield "".join(parts)
            parts = []

    if parts:
        yield "".join(parts)
