"""Fatal error type raised when a menu session cannot continue."""

from __future__ import annotations


class LazyMenuError(RuntimeError):
    """Unrecoverable failure; the CLI restores the terminal and exits non-zero."""
