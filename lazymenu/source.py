"""Candidate loading from a binary input stream."""

from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO

from .errors import LazyMenuError
from .text_width import text_width

MIN_INPUT_WIDTH = 10


def read_candidates(stream: BinaryIO | Iterable[bytes]) -> tuple[bytes, ...]:
    """Read one candidate per line, dropping a single trailing newline."""
    try:
        return tuple(line[:-1] if line.endswith(b"\n") else line for line in stream)
    except MemoryError as exc:
        raise LazyMenuError("Can't allocate candidate list.") from exc


def widest_item_width(items: Iterable[bytes]) -> int:
    """Widest label width, padding included; ``MIN_INPUT_WIDTH`` when empty."""
    return max((text_width(item) for item in items), default=MIN_INPUT_WIDTH)


def input_field_width(items: Iterable[bytes], columns: int) -> int:
    """Width reserved for the query in horizontal mode: widest item, capped at 1/6 of the screen."""
    return min(max(MIN_INPUT_WIDTH, widest_item_width(items)), columns // 6)
