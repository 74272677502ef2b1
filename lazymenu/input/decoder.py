"""Byte-level decoder turning raw terminal input into commands.

``decode_step`` is a pure transition function over four states; the
``InputDecoder`` class only remembers the current state between bytes.
"""

from __future__ import annotations

from enum import Enum

from .commands import Command, KeyInput

ESC = 0x1B
CSI_INTRODUCER = ord("[")


def control(ch: str) -> int:
    """Byte produced by Ctrl+``ch`` (``control("C") == 0x03``)."""
    return ord(ch) ^ 0x40


class DecoderState(Enum):
    NORMAL = "normal"
    GOT_ESCAPE = "got_escape"
    GOT_CSI = "got_csi"
    GOT_CSI_DIGIT = "got_csi_digit"


CONTROL_COMMANDS: dict[int, Command] = {
    control("A"): Command.MOVE_TO_START,
    control("B"): Command.MOVE_LEFT,
    control("C"): Command.CANCEL,
    control("D"): Command.DELETE_FORWARD,
    control("E"): Command.MOVE_TO_END,
    control("F"): Command.MOVE_RIGHT,
    control("H"): Command.DELETE_BACKWARD,
    control("I"): Command.MOVE_RIGHT,
    control("J"): Command.ACCEPT,
    control("K"): Command.DELETE_TO_END,
    control("M"): Command.ACCEPT,
    control("N"): Command.SELECT_NEXT,
    control("P"): Command.SELECT_PREVIOUS,
    control("U"): Command.DELETE_TO_START,
    control("V"): Command.PAGE_BACKWARD,
    control("W"): Command.DELETE_WORD_BACKWARD,
    control("\\"): Command.ACCEPT,
    control("]"): Command.ACCEPT,
    control("?"): Command.DELETE_BACKWARD,
}

ESCAPE_COMMANDS: dict[int, Command] = {
    ESC: Command.CANCEL,
    ord("b"): Command.MOVE_WORD_BACKWARD,
    ord("f"): Command.MOVE_WORD_FORWARD,
    ord("d"): Command.DELETE_WORD_FORWARD,
    ord("v"): Command.PAGE_FORWARD,
}

CSI_FINAL_COMMANDS: dict[int, Command] = {
    ord("A"): Command.SELECT_PREVIOUS,
    ord("B"): Command.SELECT_NEXT,
    ord("C"): Command.MOVE_RIGHT,
    ord("D"): Command.MOVE_LEFT,
    ord("Z"): Command.SELECT_PREVIOUS,
    ord("H"): Command.MOVE_TO_START,
    ord("F"): Command.MOVE_TO_END,
}

# ``ESC [ <digit>`` is followed by a terminator (normally ``~``) that is
# consumed without inspection.
CSI_DIGIT_COMMANDS: dict[int, Command] = {
    ord("1"): Command.MOVE_TO_START,
    ord("7"): Command.MOVE_TO_START,
    ord("2"): Command.NOOP,
    ord("3"): Command.DELETE_FORWARD,
    ord("4"): Command.MOVE_TO_END,
    ord("8"): Command.MOVE_TO_END,
    ord("5"): Command.PAGE_BACKWARD,
    ord("6"): Command.PAGE_FORWARD,
}

NOOP = KeyInput(Command.NOOP)


def is_control_byte(value: int) -> bool:
    return value < 0x20 or value == 0x7F


def decode_step(
    state: DecoderState,
    value: int,
    pending: Command | None = None,
) -> tuple[DecoderState, KeyInput | None, Command | None]:
    """Advance the decoder by one byte.

    Returns ``(next_state, emitted, pending)``. ``emitted`` is ``None`` while
    a sequence is incomplete. ``pending`` holds the command chosen by an
    ``ESC [ <digit>`` prefix until its terminator byte arrives.
    """
    if state is DecoderState.NORMAL:
        if value == ESC:
            return DecoderState.GOT_ESCAPE, None, None
        command = CONTROL_COMMANDS.get(value)
        if command is not None:
            return DecoderState.NORMAL, KeyInput(command), None
        if is_control_byte(value):
            return DecoderState.NORMAL, NOOP, None
        return DecoderState.NORMAL, KeyInput(Command.INSERT_CHAR, bytes((value,))), None

    if state is DecoderState.GOT_ESCAPE:
        if value == CSI_INTRODUCER:
            return DecoderState.GOT_CSI, None, None
        return DecoderState.NORMAL, KeyInput(ESCAPE_COMMANDS.get(value, Command.NOOP)), None

    if state is DecoderState.GOT_CSI:
        digit_command = CSI_DIGIT_COMMANDS.get(value)
        if digit_command is not None:
            return DecoderState.GOT_CSI_DIGIT, None, digit_command
        return DecoderState.NORMAL, KeyInput(CSI_FINAL_COMMANDS.get(value, Command.NOOP)), None

    # GOT_CSI_DIGIT: swallow the terminator.
    return DecoderState.NORMAL, KeyInput(pending or Command.NOOP), None


class InputDecoder:
    """Stateful wrapper around ``decode_step``."""

    def __init__(self) -> None:
        self.state = DecoderState.NORMAL
        self._pending: Command | None = None

    @property
    def idle(self) -> bool:
        return self.state is DecoderState.NORMAL

    def reset(self) -> None:
        self.state = DecoderState.NORMAL
        self._pending = None

    def feed(self, value: int) -> KeyInput | None:
        """Consume one byte; return a command once a sequence completes."""
        self.state, emitted, self._pending = decode_step(self.state, value, self._pending)
        return emitted

    def feed_bytes(self, data: bytes) -> list[KeyInput]:
        """Decode every complete keystroke in ``data``."""
        decoded: list[KeyInput] = []
        for value in data:
            emitted = self.feed(value)
            if emitted is not None:
                decoded.append(emitted)
        return decoded
