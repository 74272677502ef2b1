"""Visible-window bookkeeping for the match chain.

Positions are indices into the current match chain. ``curr`` is the first
visible entry, ``next`` the first entry past the window and ``prev`` the
anchor of the preceding page. ``next``/``prev`` are ``None`` when the end or
start of the chain is already visible.
"""

from __future__ import annotations

from collections.abc import Sequence

from .text_width import text_width

SCROLL_MARKER_WIDTH = text_width("<") + text_width(">")


class Viewport:
    """Page the match chain into windows that fit the terminal.

    ``lines == 0`` selects the single-line horizontal layout, where window
    size depends on label widths. Any other value is a vertical list of
    exactly ``lines`` entries.
    """

    def __init__(self, columns: int, lines: int = 0, prompt_width: int = 0, input_width: int = 0) -> None:
        self.columns = columns
        self.lines = max(0, lines)
        self.prompt_width = prompt_width
        self.input_width = input_width
        self.widths: list[int] = []
        self.curr: int | None = None
        self.prev: int | None = None
        self.next: int | None = None

    @property
    def vertical(self) -> bool:
        return self.lines > 0

    @property
    def count(self) -> int:
        return len(self.widths)

    def available_width(self) -> int:
        """Columns left for items in horizontal mode, never below one."""
        return max(1, self.columns - (self.prompt_width + self.input_width + SCROLL_MARKER_WIDTH))

    def reset(self, widths: Sequence[int]) -> None:
        """Adopt a new chain (given as label widths) and anchor at its start."""
        self.widths = list(widths)
        self.curr = 0 if self.widths else None
        self.recalc()

    def recalc(self) -> None:
        """Recompute ``prev``/``next`` around the current anchor."""
        if self.curr is None:
            self.prev = self.next = None
            return
        if self.vertical:
            self._recalc_vertical()
        else:
            self._recalc_horizontal()

    def _recalc_vertical(self) -> None:
        curr = self.curr
        self.next = curr + self.lines if curr + self.lines < self.count else None
        self.prev = max(0, curr - self.lines) if curr > 0 else None

    def _recalc_horizontal(self) -> None:
        limit = self.available_width()
        curr = self.curr

        used = 0
        pos = curr
        while pos < self.count:
            used += min(self.widths[pos], limit)
            if used > limit:
                break
            pos += 1
        self.next = pos if pos < self.count else None

        used = 0
        pos = curr
        while pos > 0:
            used += min(self.widths[pos - 1], limit)
            if used > limit:
                break
            pos -= 1
        self.prev = pos if curr > 0 else None

    def end(self) -> int:
        """Exclusive end of the visible window."""
        if self.curr is None:
            return 0
        return self.next if self.next is not None else self.count

    def visible(self) -> range:
        if self.curr is None:
            return range(0)
        return range(self.curr, self.end())

    def contains(self, pos: int | None) -> bool:
        return pos is not None and self.curr is not None and self.curr <= pos < self.end()

    def pan_forward(self) -> bool:
        if self.next is None:
            return False
        self.curr = self.next
        self.recalc()
        return True

    def pan_backward(self) -> bool:
        if self.prev is None:
            return False
        self.curr = self.prev
        self.recalc()
        return True

    def scroll_to_start(self) -> None:
        if self.curr is None:
            return
        self.curr = 0
        self.recalc()

    def scroll_to_end(self) -> None:
        """Pan until the last entry is visible, keeping the window as full as possible."""
        if self.curr is None:
            return
        self.curr = self.count - 1
        self.recalc()
        if self.prev is not None:
            self.curr = self.prev
            self.recalc()
        while self.next is not None:
            self.curr += 1
            self.recalc()

    def follow(self, pos: int | None) -> None:
        """Pan page by page until ``pos`` is inside the window."""
        if pos is None or self.curr is None:
            return
        while pos >= self.end() and self.pan_forward():
            pass
        while pos < self.curr and self.pan_backward():
            pass
