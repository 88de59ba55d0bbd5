"""Terminal Tetris.

Run with: `python -m retris` (or the installed `retris` script).

Curses owns the terminal while the game runs, so log output only goes to a
file when ``--log-file`` is given.
"""

from __future__ import annotations

import argparse
import curses
import logging
from typing import Optional, Sequence

from .config import RANDOMIZERS, GameConfig
from .errors import ConfigurationError
from .terminal import play


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = GameConfig()
    parser = argparse.ArgumentParser(prog="retris", description=__doc__)
    parser.add_argument("--width", type=int, default=defaults.width, help="Playfield width in cells.")
    parser.add_argument("--height", type=int, default=defaults.height, help="Playfield height in cells.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument(
        "--randomizer",
        choices=RANDOMIZERS,
        default=defaults.randomizer,
        help="Piece selection policy.",
    )
    parser.add_argument(
        "--no-wall-kicks",
        action="store_true",
        help="Reject blocked rotations instead of nudging the piece sideways.",
    )
    parser.add_argument(
        "--lines-per-level",
        type=int,
        default=defaults.lines_per_level,
        help="Cleared lines needed to advance one level.",
    )
    parser.add_argument("--log-file", default=None, help="Write log messages to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser


def configure_logging(log_file: Optional[str], level: str) -> None:
    """Route package logs to ``log_file``, or silence them when there is none."""

    logger = logging.getLogger("retris")
    if log_file is None:
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = GameConfig.from_args(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    configure_logging(args.log_file, args.log_level)
    final = curses.wrapper(play, config)
    LOGGER.info("Session ended with score %d", final.score)
    print(f"Score: {final.score}  Level: {final.level}  Lines: {final.lines}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
