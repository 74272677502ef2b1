"""Bounded UTF-8 query buffer with a code-point aligned cursor.

The buffer stores raw bytes so partially typed multi-byte characters can be
held between keystrokes. Cursor movement always skips continuation bytes,
which keeps the cursor on a code-point boundary.
"""

from __future__ import annotations

from .text_width import is_continuation_byte

DEFAULT_CAPACITY = 8192
WORD_SEPARATOR = 0x20


class EditBuffer:
    """Query text plus cursor offset.

    ``capacity`` counts one reserved byte, so at most ``capacity - 1`` bytes
    of text are held. Edits that would overflow are rejected and report
    ``False``; nothing is raised.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, text: bytes = b"") -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._data = bytearray()
        self.cursor = 0
        if text:
            self.set_text(text)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def text(self) -> bytes:
        return bytes(self._data)

    @property
    def max_length(self) -> int:
        return self.capacity - 1

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self._data)

    def char_at(self, offset: int) -> int | None:
        """Return the byte at ``offset`` or ``None`` past the end."""
        if 0 <= offset < len(self._data):
            return self._data[offset]
        return None

    def char_before(self) -> int | None:
        """Return the lead byte of the code point left of the cursor."""
        if self.cursor == 0:
            return None
        return self._data[self.next_rune(-1)]

    def next_rune(self, direction: int, offset: int | None = None) -> int:
        """Return the neighbouring code-point boundary without moving.

        ``direction`` is ``-1`` or ``+1``. The result is clamped to
        ``[0, len]``.
        """
        step = -1 if direction < 0 else 1
        pos = (self.cursor if offset is None else offset) + step
        while 0 <= pos < len(self._data) and is_continuation_byte(self._data[pos]):
            pos += step
        return max(0, min(pos, len(self._data)))

    def _align(self, offset: int) -> int:
        offset = max(0, min(offset, len(self._data)))
        while 0 < offset < len(self._data) and is_continuation_byte(self._data[offset]):
            offset -= 1
        return offset

    def _checked_offset(self, at: int | None) -> int:
        if at is None:
            return self.cursor
        if not 0 <= at <= len(self._data):
            raise IndexError(f"offset {at} outside buffer of length {len(self._data)}")
        return at

    def insert(self, data: bytes, at: int | None = None) -> bool:
        """Splice ``data`` in at ``at`` (default: cursor) and advance past it.

        Returns ``False`` and leaves the buffer untouched when the result
        would exceed capacity.
        """
        pos = self._checked_offset(at)
        if len(self._data) + len(data) > self.max_length:
            return False
        self._data[pos:pos] = data
        self.cursor = pos + len(data)
        return True

    def delete(self, count: int, at: int | None = None) -> bool:
        """Remove ``count`` bytes at ``at``; negative counts delete backward.

        The cursor is left at the lower edge of the removed span. Returns
        whether any byte was removed.
        """
        pos = self._checked_offset(at)
        if count < 0:
            start, end = max(0, pos + count), pos
        else:
            start, end = pos, min(len(self._data), pos + count)
        self.cursor = start
        if start == end:
            return False
        del self._data[start:end]
        return True

    def seek(self, direction: int) -> bool:
        """Move one code point left (``-1``) or right (``+1``)."""
        target = self.next_rune(direction)
        moved = target != self.cursor
        self.cursor = target
        return moved

    def move_to(self, offset: int) -> None:
        """Place the cursor at ``offset``, snapped back to a code-point boundary."""
        self.cursor = self._align(offset)

    def move_to_start(self) -> None:
        self.cursor = 0

    def move_to_end(self) -> None:
        self.cursor = len(self._data)

    def clear(self) -> bool:
        changed = bool(self._data)
        self._data.clear()
        self.cursor = 0
        return changed

    def set_text(self, data: bytes) -> None:
        """Replace the contents, truncating to capacity on a code-point boundary."""
        cut = min(len(data), self.max_length)
        while 0 < cut < len(data) and is_continuation_byte(data[cut]):
            cut -= 1
        self._data = bytearray(data[:cut])
        self.cursor = len(self._data)

    def delete_to_end(self) -> bool:
        return self.delete(len(self._data) - self.cursor)

    def delete_to_start(self) -> bool:
        return self.delete(-self.cursor)

    def delete_backward(self) -> bool:
        if self.cursor == 0:
            return False
        return self.delete(self.next_rune(-1) - self.cursor)

    def delete_forward(self) -> bool:
        if self.at_end:
            return False
        return self.delete(self.next_rune(1) - self.cursor)

    def word_start_before(self) -> int:
        """Offset reached by skipping spaces, then a word, leftwards."""
        pos = self.cursor
        while pos > 0 and self._data[self.next_rune(-1, pos)] == WORD_SEPARATOR:
            pos = self.next_rune(-1, pos)
        while pos > 0 and self._data[self.next_rune(-1, pos)] != WORD_SEPARATOR:
            pos = self.next_rune(-1, pos)
        return pos

    def word_end_after(self) -> int:
        """Offset reached by skipping spaces, then a word, rightwards."""
        pos = self.cursor
        size = len(self._data)
        while pos < size and self._data[pos] == WORD_SEPARATOR:
            pos = self.next_rune(1, pos)
        while pos < size and self._data[pos] != WORD_SEPARATOR:
            pos = self.next_rune(1, pos)
        return pos

    def move_word_backward(self) -> bool:
        target = self.word_start_before()
        moved = target != self.cursor
        self.cursor = target
        return moved

    def move_word_forward(self) -> bool:
        target = self.word_end_after()
        moved = target != self.cursor
        self.cursor = target
        return moved

    def delete_word_backward(self) -> bool:
        return self.delete(self.word_start_before() - self.cursor)

    def delete_word_forward(self) -> bool:
        return self.delete(self.word_end_after() - self.cursor)
