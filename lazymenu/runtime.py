"""Menu session bootstrap.

Wires the terminal, match engine, viewport, controller and renderer
together, then runs the interactive loop inside raw mode. Raw mode is always
restored, whether the session is accepted, cancelled or fails.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from .config import MenuOptions
from .edit_buffer import EditBuffer
from .input import InputDecoder, read_input
from .matching import MatchEngine
from .render import Renderer
from .session import CANCELLED, SessionController, SessionOutcome
from .source import input_field_width
from .terminal import TerminalController, open_controlling_tty
from .text_width import text_width
from .viewport import Viewport

logger = logging.getLogger(__name__)


def effective_lines(requested: int, rows: int) -> int:
    """Clamp the vertical line count so the prompt row still fits."""
    return min(max(requested, 0), max(0, rows - 1))


def build_session(
    candidates: Sequence[bytes],
    options: MenuOptions,
    columns: int,
    rows: int,
    out_fd: int = 2,
) -> tuple[SessionController, Renderer]:
    """Create the controller and renderer for a terminal of the given size."""
    lines = effective_lines(options.lines, rows)
    prompt_width = text_width(options.prompt) if options.prompt else 0
    input_width = input_field_width(candidates, columns)
    engine = MatchEngine(candidates, case_insensitive=options.case_insensitive)
    viewport = Viewport(columns, lines=lines, prompt_width=prompt_width, input_width=input_width)
    controller = SessionController(engine, viewport, EditBuffer())
    renderer = Renderer(
        out_fd,
        columns,
        rows,
        lines=lines,
        bar_position=options.bar_position,
        prompt=options.prompt,
        input_width=input_width,
    )
    return controller, renderer


def run_menu(
    candidates: Sequence[bytes],
    options: MenuOptions,
    tty_fd: int | None = None,
    out_fd: int = 2,
) -> SessionOutcome:
    """Run one interactive selection over ``candidates``.

    Keys are read from ``tty_fd`` (the controlling terminal by default) and
    the menu is painted on ``out_fd`` so stdout stays free for the result.
    """
    owns_tty = tty_fd is None
    if tty_fd is None:
        tty_fd = open_controlling_tty()
    try:
        terminal = TerminalController(tty_fd, out_fd)
        columns, rows = terminal.size()
        controller, renderer = build_session(candidates, options, columns, rows, terminal.stdout_fd)
        logger.info(
            "session start: %d candidates, %dx%d, lines=%d, bar=%s",
            len(candidates),
            columns,
            rows,
            renderer.lines,
            options.bar_position,
        )
        decoder = InputDecoder()
        with terminal.raw_mode():
            renderer.start()
            try:
                outcome = controller.run(lambda: read_input(tty_fd, decoder), renderer.paint)
            except KeyboardInterrupt:
                outcome = CANCELLED
            finally:
                renderer.finish()
    finally:
        if owns_tty:
            os.close(tty_fd)
    logger.info("session end: accepted=%s", outcome.accepted)
    return outcome
