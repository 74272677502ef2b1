"""Logical commands produced by the input decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Command(Enum):
    INSERT_CHAR = "insert_char"
    MOVE_TO_START = "move_to_start"
    MOVE_TO_END = "move_to_end"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_WORD_BACKWARD = "move_word_backward"
    MOVE_WORD_FORWARD = "move_word_forward"
    SELECT_PREVIOUS = "select_previous"
    SELECT_NEXT = "select_next"
    PAGE_BACKWARD = "page_backward"
    PAGE_FORWARD = "page_forward"
    DELETE_FORWARD = "delete_forward"
    DELETE_BACKWARD = "delete_backward"
    DELETE_TO_END = "delete_to_end"
    DELETE_TO_START = "delete_to_start"
    DELETE_WORD_BACKWARD = "delete_word_backward"
    DELETE_WORD_FORWARD = "delete_word_forward"
    ACCEPT = "accept"
    CANCEL = "cancel"
    NOOP = "noop"


@dataclass(frozen=True)
class KeyInput:
    """One decoded keystroke; ``data`` carries the byte for ``INSERT_CHAR``."""

    command: Command
    data: bytes = b""
