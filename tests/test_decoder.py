"""Raw-byte decoding into logical commands.

Covers control keys, ESC/CSI sequences, terminator swallowing and the pure
transition function.
"""

from __future__ import annotations

import unittest

from lazymenu.input import Command, DecoderState, InputDecoder, KeyInput, control, decode_step


def _decode(data: bytes) -> list[Command]:
    return [key.command for key in InputDecoder().feed_bytes(data)]


class ControlKeyTests(unittest.TestCase):
    def test_control_helper(self) -> None:
        self.assertEqual(control("C"), 0x03)
        self.assertEqual(control("?"), 0x7F)
        self.assertEqual(control("["), 0x1B)

    def test_control_key_table(self) -> None:
        cases = {
            b"\x01": Command.MOVE_TO_START,
            b"\x05": Command.MOVE_TO_END,
            b"\x02": Command.MOVE_LEFT,
            b"\x06": Command.MOVE_RIGHT,
            b"\t": Command.MOVE_RIGHT,
            b"\x10": Command.SELECT_PREVIOUS,
            b"\x0e": Command.SELECT_NEXT,
            b"\x04": Command.DELETE_FORWARD,
            b"\x7f": Command.DELETE_BACKWARD,
            b"\x08": Command.DELETE_BACKWARD,
            b"\x0b": Command.DELETE_TO_END,
            b"\x15": Command.DELETE_TO_START,
            b"\x17": Command.DELETE_WORD_BACKWARD,
            b"\x16": Command.PAGE_BACKWARD,
            b"\x03": Command.CANCEL,
            b"\r": Command.ACCEPT,
            b"\n": Command.ACCEPT,
            b"\x1d": Command.ACCEPT,
            b"\x1c": Command.ACCEPT,
        }
        for data, command in cases.items():
            with self.subTest(data=data):
                self.assertEqual(_decode(data), [command])

    def test_unmapped_control_byte_is_noop(self) -> None:
        self.assertEqual(_decode(b"\x19"), [Command.NOOP])
        self.assertEqual(_decode(b"\x00"), [Command.NOOP])

    def test_printable_bytes_are_inserted_one_at_a_time(self) -> None:
        decoded = InputDecoder().feed_bytes("a☃".encode("utf-8"))

        self.assertEqual([key.command for key in decoded], [Command.INSERT_CHAR] * 4)
        self.assertEqual(b"".join(key.data for key in decoded), "a☃".encode("utf-8"))


class EscapeSequenceTests(unittest.TestCase):
    def test_meta_keys(self) -> None:
        self.assertEqual(_decode(b"\x1bb"), [Command.MOVE_WORD_BACKWARD])
        self.assertEqual(_decode(b"\x1bf"), [Command.MOVE_WORD_FORWARD])
        self.assertEqual(_decode(b"\x1bd"), [Command.DELETE_WORD_FORWARD])
        self.assertEqual(_decode(b"\x1bv"), [Command.PAGE_FORWARD])

    def test_double_escape_cancels(self) -> None:
        self.assertEqual(_decode(b"\x1b\x1b"), [Command.CANCEL])

    def test_arrow_keys(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[Z"),
            [
                Command.SELECT_PREVIOUS,
                Command.SELECT_NEXT,
                Command.MOVE_RIGHT,
                Command.MOVE_LEFT,
                Command.SELECT_PREVIOUS,
            ],
        )

    def test_home_end_without_terminator(self) -> None:
        self.assertEqual(_decode(b"\x1b[H\x1b[F"), [Command.MOVE_TO_START, Command.MOVE_TO_END])

    def test_digit_sequences_swallow_their_terminator(self) -> None:
        self.assertEqual(
            _decode(b"\x1b[1~\x1b[7~\x1b[4~\x1b[8~\x1b[3~\x1b[5~\x1b[6~\x1b[2~x"),
            [
                Command.MOVE_TO_START,
                Command.MOVE_TO_START,
                Command.MOVE_TO_END,
                Command.MOVE_TO_END,
                Command.DELETE_FORWARD,
                Command.PAGE_BACKWARD,
                Command.PAGE_FORWARD,
                Command.NOOP,
                Command.INSERT_CHAR,
            ],
        )

    def test_unknown_sequences_fall_through_to_noop(self) -> None:
        self.assertEqual(_decode(b"\x1bq"), [Command.NOOP])
        self.assertEqual(_decode(b"\x1b[Q"), [Command.NOOP])

    def test_partial_sequence_emits_nothing_until_complete(self) -> None:
        decoder = InputDecoder()
        self.assertIsNone(decoder.feed(0x1B))
        self.assertIsNone(decoder.feed(ord("[")))
        self.assertIsNone(decoder.feed(ord("5")))
        self.assertFalse(decoder.idle)
        self.assertEqual(decoder.feed(ord("~")), KeyInput(Command.PAGE_BACKWARD))
        self.assertTrue(decoder.idle)

    def test_reset_discards_partial_sequence(self) -> None:
        decoder = InputDecoder()
        decoder.feed(0x1B)
        decoder.reset()
        self.assertEqual(decoder.feed(ord("b")), KeyInput(Command.INSERT_CHAR, b"b"))


class DecodeStepTests(unittest.TestCase):
    def test_transitions(self) -> None:
        state, emitted, pending = decode_step(DecoderState.NORMAL, 0x1B)
        self.assertEqual((state, emitted, pending), (DecoderState.GOT_ESCAPE, None, None))

        state, emitted, pending = decode_step(state, ord("["))
        self.assertEqual((state, emitted), (DecoderState.GOT_CSI, None))

        state, emitted, pending = decode_step(state, ord("3"))
        self.assertEqual((state, emitted, pending), (DecoderState.GOT_CSI_DIGIT, None, Command.DELETE_FORWARD))

        state, emitted, pending = decode_step(state, ord("~"), pending)
        self.assertEqual((state, emitted, pending), (DecoderState.NORMAL, KeyInput(Command.DELETE_FORWARD), None))


if __name__ == "__main__":
    unittest.main()
