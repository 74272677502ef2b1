"""Code-point based width measurement for menu labels.

Labels are measured in code points rather than terminal cells, and every
label reserves two columns of trailing padding.
"""

from __future__ import annotations

LABEL_PADDING = 2


def is_continuation_byte(value: int) -> bool:
    """Return whether ``value`` is a UTF-8 continuation byte (``10xxxxxx``)."""
    return (value & 0xC0) == 0x80


def code_point_count(data: bytes, limit: int | None = None) -> int:
    """Count code points in the first ``limit`` bytes of ``data``."""
    if limit is not None:
        data = data[: max(0, limit)]
    return sum(1 for value in data if not is_continuation_byte(value))


def text_width(data: bytes | str, limit: int | None = None) -> int:
    """Return label width including padding.

    ``limit`` restricts measurement to a byte prefix, which is how the query
    cursor column is derived from a byte offset.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return code_point_count(data, limit) + LABEL_PADDING


def decode_label(data: bytes) -> str:
    """Decode item bytes for display, replacing malformed sequences."""
    return data.decode("utf-8", errors="replace")
