"""Input-layer public API: command types, byte decoder and blocking reader."""

from .commands import Command, KeyInput
from .decoder import DecoderState, InputDecoder, control, decode_step
from .reader import read_input

__all__ = [
    "Command",
    "KeyInput",
    "DecoderState",
    "InputDecoder",
    "control",
    "decode_step",
    "read_input",
]
