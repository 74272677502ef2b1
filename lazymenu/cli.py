"""Command-line front door for lazymenu.

Parses CLI options on top of config defaults and reads candidates from
stdin. Then runs the interactive menu on the controlling terminal and
prints the chosen line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from . import __version__
from .config import load_menu_defaults
from .errors import LazyMenuError
from .logging_setup import configure_logging
from .runtime import run_menu
from .source import read_candidates

logger = logging.getLogger(__name__)


def _nonnegative_int(value: str) -> int:
    """argparse type for line counts."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazymenu",
        description="Pick one line from stdin with an interactive, filtered menu.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"lazymenu {__version__}")
    parser.add_argument(
        "-i",
        dest="case_insensitive",
        action="store_const",
        const=True,
        default=None,
        help="Match case-insensitively.",
    )
    position = parser.add_mutually_exclusive_group()
    position.add_argument(
        "-t", dest="bar_position", action="store_const", const="top", help="Draw the menu at the top of the screen."
    )
    position.add_argument(
        "-b",
        dest="bar_position",
        action="store_const",
        const="bottom",
        help="Draw the menu at the bottom of the screen.",
    )
    parser.add_argument("-p", dest="prompt", metavar="PROMPT", default=None, help="Prompt shown left of the input.")
    parser.add_argument(
        "-l",
        dest="lines",
        metavar="LINES",
        type=_nonnegative_int,
        default=None,
        help="List matches vertically on LINES rows (0 = single line).",
    )
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, run the menu and exit with its status.

    Exit status is 0 with the selection on stdout, or 1 with no output when
    the menu is cancelled.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    options = load_menu_defaults().with_overrides(
        case_insensitive=args.case_insensitive,
        bar_position=args.bar_position,
        prompt=args.prompt,
        lines=args.lines,
    )

    try:
        candidates = read_candidates(sys.stdin.buffer)
        outcome = run_menu(candidates, options)
    except LazyMenuError as exc:
        logger.error("fatal: %s", exc)
        raise SystemExit(str(exc)) from exc

    if outcome.accepted and outcome.text is not None:
        sys.stdout.buffer.write(outcome.text + b"\n")
        sys.stdout.buffer.flush()
    raise SystemExit(outcome.exit_status)


if __name__ == "__main__":
    main()
