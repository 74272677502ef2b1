"""Blocking keystroke reader for the controlling terminal."""

from __future__ import annotations

import logging
import os

from .commands import Command, KeyInput
from .decoder import InputDecoder

logger = logging.getLogger(__name__)


def read_input(fd: int, decoder: InputDecoder) -> KeyInput:
    """Read bytes from ``fd`` until ``decoder`` emits one keystroke.

    Blocks on each byte; there is no escape-sequence timeout, so a lone
    ``ESC`` waits for the following key. End of input cancels the session.
    """
    while True:
        ch = os.read(fd, 1)
        if not ch:
            logger.debug("terminal input closed")
            decoder.reset()
            return KeyInput(Command.CANCEL)
        emitted = decoder.feed(ch[0])
        if emitted is not None:
            return emitted
