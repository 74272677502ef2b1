"""ANSI painter for the menu bar.

Composes one escape-coded frame per repaint and writes it in a single
``os.write``. Labels are padded to their allotted width, truncated labels
end in ``..``, and widths below ``MIN_LABEL_WIDTH`` draw nothing.
"""

from __future__ import annotations

import os

from .config import BAR_POSITIONS
from .session import MenuFrame
from .text_width import LABEL_PADDING, decode_label, text_width

HIGHLIGHT_SGR = "\033[7m"
RESET_SGR = "\033[0m"
MIN_LABEL_WIDTH = 3
ELLIPSIS = ".."


def selected_with_ansi(text: str) -> str:
    """Apply reverse video so the highlight survives embedded resets."""
    if not text:
        return text
    return HIGHLIGHT_SGR + text.replace(RESET_SGR, RESET_SGR[:-1] + ";7m") + RESET_SGR


def draw_text(label: bytes | str, width: int, highlight: bool = False) -> str:
    """Render ``label`` into exactly ``width`` columns (two of them padding).

    Labels wider than the slot are cut and marked with an ellipsis.
    """
    if width < MIN_LABEL_WIDTH:
        return ""
    text = decode_label(label) if isinstance(label, bytes) else label
    cells = width - LABEL_PADDING
    body = text[:cells].ljust(cells)
    if text_width(text) > width:
        keep = max(cells - len(ELLIPSIS), 0)
        body = body[:keep] + ELLIPSIS[: cells - keep]
    if highlight:
        body = selected_with_ansi(body)
    return body + " " * LABEL_PADDING


class Renderer:
    """Paint ``MenuFrame`` snapshots onto the terminal.

    ``bar_position`` is one of ``BAR_POSITIONS``. Inline bars draw at the
    current cursor row; top and bottom bars are pinned to the screen edge.
    """

    def __init__(
        self,
        fd: int,
        columns: int,
        rows: int,
        lines: int = 0,
        bar_position: str = "inline",
        prompt: str | None = None,
        input_width: int = 0,
    ) -> None:
        if bar_position not in BAR_POSITIONS:
            raise ValueError(f"unknown bar position: {bar_position!r}")
        self.fd = fd
        self.columns = columns
        self.rows = rows
        self.lines = lines
        self.bar_position = bar_position
        self.prompt = prompt
        self.prompt_width = text_width(prompt) if prompt else 0
        self.input_width = input_width

    def _write(self, payload: str) -> None:
        os.write(self.fd, payload.encode("utf-8"))

    def reset_line(self) -> str:
        """Escape sequence returning the cursor to the first bar row."""
        if self.bar_position == "top":
            return "\033[1H"
        if self.bar_position == "bottom":
            return f"\033[{max(1, self.rows - self.lines)}H"
        return f"\033[{self.lines}F"

    def start(self) -> None:
        if self.bar_position != "inline":
            self._write(self.reset_line())

    def compose(self, frame: MenuFrame) -> str:
        out: list[str] = [RESET_SGR, "\033[0G", "\033[K"]
        if self.prompt:
            out.append(draw_text(self.prompt, self.prompt_width))

        query_width = self.input_width if (self.lines == 0 and frame.has_matches) else self.columns - self.prompt_width
        out.append(draw_text(frame.query, query_width))

        if self.lines > 0:
            if self.bar_position != "inline":
                out.append(self.reset_line())
            drawn = 0
            for idx, item in enumerate(frame.items[: self.lines]):
                out.append("\n")
                out.append(draw_text(item, self.columns, highlight=idx == frame.selected))
                drawn += 1
            out.extend("\n\033[K" for _ in range(self.lines - drawn))
            out.append(self.reset_line())
        elif frame.has_matches:
            remaining = self.columns - (6 + self.prompt_width + self.input_width)
            if frame.more_before:
                out.append(draw_text("<", 3))
            for idx, item in enumerate(frame.items):
                item_width = text_width(item)
                out.append(draw_text(item, min(item_width, remaining), highlight=idx == frame.selected))
                remaining -= item_width
                if remaining <= 0:
                    break
            if frame.more_after:
                out.append(f"\033[{self.columns - 4}G")
                out.append(draw_text("  >", 5))

        cursor_col = self.prompt_width + text_width(frame.query, frame.cursor) - 1
        out.append(f"\033[{max(1, cursor_col)}G")
        return "".join(out)

    def paint(self, frame: MenuFrame) -> None:
        self._write(self.compose(frame))

    def finish(self) -> None:
        """Leave the terminal below (inline) or clear (pinned) the menu bar."""
        if self.bar_position == "inline":
            self._write("\n")
        else:
            self._write("\033[G\033[K")
