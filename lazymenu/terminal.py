"""Terminal control helpers for the menu session.

Owns the controlling-tty file descriptor, raw-mode lifecycle and window
size queries. Output post-processing stays enabled so ``\\n`` still returns
the carriage when the vertical list is drawn.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .errors import LazyMenuError

DEFAULT_SIZE = (80, 24)
TTY_PATH = "/dev/tty"

logger = logging.getLogger(__name__)


def open_controlling_tty(path: str = TTY_PATH) -> int:
    """Open the controlling terminal for keyboard input.

    Candidates usually arrive on stdin, so keys must be read elsewhere.
    """
    try:
        return os.open(path, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise LazyMenuError("Can't reopen tty.") from exc


def query_size(fd: int) -> tuple[int, int]:
    """Return ``(columns, rows)`` for ``fd``, falling back to 80x24."""
    try:
        size = os.get_terminal_size(fd)
    except OSError:
        return DEFAULT_SIZE
    if size.columns <= 0 or size.lines <= 0:
        return DEFAULT_SIZE
    return size.columns, size.lines


class TerminalController:
    """Switch the input tty into raw mode and restore it afterwards."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise LazyMenuError("Can't read terminal attributes.") from exc

    def size(self) -> tuple[int, int]:
        return query_size(self.stdin_fd)

    def enable_raw_mode(self) -> None:
        """Disable echo, line buffering and signal keys; keep output processing."""
        tty.setraw(self.stdin_fd, termios.TCSANOW)
        attrs = termios.tcgetattr(self.stdin_fd)
        attrs[tty.OFLAG] |= termios.OPOST
        termios.tcsetattr(self.stdin_fd, termios.TCSANOW, attrs)
        logger.debug("raw mode enabled on fd %d", self.stdin_fd)

    def restore(self) -> None:
        termios.tcsetattr(self.stdin_fd, termios.TCSANOW, self._saved_tty_state)
        logger.debug("terminal attributes restored on fd %d", self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that always restores the saved tty state."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.restore()
