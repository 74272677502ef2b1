"""Interactive menu session: state, command application and the main loop.

The controller owns the query buffer, the match chain, the selection and
the viewport. Each command mutates that state; text edits re-run the match
engine and reset the selection to the first match.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .edit_buffer import EditBuffer
from .input.commands import Command, KeyInput
from .matching import MatchEngine
from .viewport import Viewport

logger = logging.getLogger(__name__)

CANCEL_SUFFIX = b"qq"
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass(frozen=True)
class SessionOutcome:
    """How a session ended. ``text`` is ``None`` on cancellation."""

    accepted: bool
    text: bytes | None = None

    @property
    def exit_status(self) -> int:
        return EXIT_SUCCESS if self.accepted else EXIT_FAILURE


CANCELLED = SessionOutcome(accepted=False)


@dataclass(frozen=True)
class MenuFrame:
    """Everything the renderer needs for one repaint."""

    query: bytes
    cursor: int
    items: tuple[bytes, ...]
    selected: int | None
    more_before: bool
    more_after: bool
    has_matches: bool


@dataclass
class SessionState:
    buffer: EditBuffer
    viewport: Viewport
    matches: list[int] = field(default_factory=list)
    sel: int | None = None

    @property
    def last(self) -> int | None:
        return len(self.matches) - 1 if self.matches else None


class SessionController:
    """Apply decoded commands to the session state.

    ``sel`` and viewport positions index into ``state.matches``; the pool
    index of the selected item is ``state.matches[state.sel]``.
    """

    def __init__(self, engine: MatchEngine, viewport: Viewport, buffer: EditBuffer | None = None) -> None:
        self.engine = engine
        self.state = SessionState(buffer=buffer if buffer is not None else EditBuffer(), viewport=viewport)
        self._handlers: dict[Command, Callable[[], object]] = {
            Command.MOVE_TO_START: self._move_to_start,
            Command.MOVE_TO_END: self._move_to_end,
            Command.MOVE_LEFT: self._move_left,
            Command.MOVE_RIGHT: self._move_right,
            Command.MOVE_WORD_BACKWARD: self.state.buffer.move_word_backward,
            Command.MOVE_WORD_FORWARD: self.state.buffer.move_word_forward,
            Command.SELECT_PREVIOUS: self.select_previous,
            Command.SELECT_NEXT: self.select_next,
            Command.PAGE_BACKWARD: self._page_backward,
            Command.PAGE_FORWARD: self._page_forward,
            Command.DELETE_FORWARD: self._edit(self.state.buffer.delete_forward),
            Command.DELETE_BACKWARD: self._edit(self.state.buffer.delete_backward),
            Command.DELETE_TO_END: self._edit(self.state.buffer.delete_to_end),
            Command.DELETE_TO_START: self._edit(self.state.buffer.delete_to_start),
            Command.DELETE_WORD_BACKWARD: self._edit(self.state.buffer.delete_word_backward),
            Command.DELETE_WORD_FORWARD: self._edit(self.state.buffer.delete_word_forward),
        }
        self.refilter()

    @property
    def selected_text(self) -> bytes | None:
        if self.state.sel is None:
            return None
        return self.engine.text(self.state.matches[self.state.sel])

    def refilter(self, narrow: bool = False) -> None:
        """Re-run matching for the current query and reset selection and window."""
        state = self.state
        state.matches = list(self.engine.match(state.buffer.text, narrow=narrow))
        state.sel = 0 if state.matches else None
        state.viewport.reset(self.engine.chain_widths())

    def _edit(self, operation: Callable[[], bool]) -> Callable[[], None]:
        def apply_edit() -> None:
            if operation():
                self.refilter()

        return apply_edit

    def insert(self, data: bytes) -> bool:
        buffer = self.state.buffer
        if not buffer.insert(data):
            return False
        self.refilter(narrow=buffer.at_end)
        return True

    def select_previous(self) -> None:
        state = self.state
        if not state.sel:
            return
        state.sel -= 1
        if state.sel < (state.viewport.curr or 0):
            state.viewport.pan_backward()
        state.viewport.follow(state.sel)

    def select_next(self) -> None:
        state = self.state
        if state.sel is None or state.sel >= len(state.matches) - 1:
            return
        state.sel += 1
        if state.sel == state.viewport.next:
            state.viewport.pan_forward()
        state.viewport.follow(state.sel)

    def _move_to_start(self) -> None:
        state = self.state
        if not state.sel:
            state.buffer.move_to_start()
            return
        state.sel = 0
        state.viewport.scroll_to_start()

    def _move_to_end(self) -> None:
        state = self.state
        if not state.buffer.at_end:
            state.buffer.move_to_end()
            return
        if state.viewport.next is not None:
            state.viewport.scroll_to_end()
        state.sel = state.last

    def _move_left(self) -> None:
        state = self.state
        if state.buffer.cursor > 0 and (not state.sel or state.viewport.vertical):
            state.buffer.seek(-1)
            return
        self.select_previous()

    def _move_right(self) -> None:
        if not self.state.buffer.at_end:
            self.state.buffer.seek(1)
            return
        self.select_next()

    def _page_backward(self) -> None:
        viewport = self.state.viewport
        if viewport.pan_backward():
            self.state.sel = viewport.curr

    def _page_forward(self) -> None:
        viewport = self.state.viewport
        if viewport.pan_forward():
            self.state.sel = viewport.curr

    def _accept(self) -> SessionOutcome:
        selected = self.selected_text
        if selected is None:
            return SessionOutcome(accepted=True, text=self.state.buffer.text)
        self.state.buffer.set_text(selected)
        self.refilter(narrow=True)
        return SessionOutcome(accepted=True, text=selected)

    def apply(self, key: KeyInput) -> SessionOutcome | None:
        """Apply one keystroke; return an outcome when the session ends."""
        command = key.command
        if command is Command.CANCEL:
            return CANCELLED
        if command is Command.ACCEPT:
            return self._accept()
        if command is Command.INSERT_CHAR:
            self.insert(key.data)
            if self.state.buffer.text.endswith(CANCEL_SUFFIX):
                return CANCELLED
            return None
        handler = self._handlers.get(command)
        if handler is not None:
            handler()
        return None

    def frame(self) -> MenuFrame:
        state = self.state
        viewport = state.viewport
        window = viewport.visible()
        return MenuFrame(
            query=state.buffer.text,
            cursor=state.buffer.cursor,
            items=tuple(self.engine.text(state.matches[pos]) for pos in window),
            selected=(state.sel - window.start) if state.sel is not None and state.sel in window else None,
            more_before=bool(viewport.curr),
            more_after=viewport.next is not None,
            has_matches=bool(state.matches),
        )

    def run(
        self,
        read_key: Callable[[], KeyInput],
        paint: Callable[[MenuFrame], None],
    ) -> SessionOutcome:
        """Read, apply and repaint until the session is accepted or cancelled."""
        paint(self.frame())
        while True:
            key = read_key()
            outcome = self.apply(key)
            if outcome is not None:
                if outcome.accepted:
                    paint(self.frame())
                logger.debug("session finished accepted=%s", outcome.accepted)
                return outcome
            paint(self.frame())
