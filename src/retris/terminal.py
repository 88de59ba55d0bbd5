"""Curses front-end for the game engine.

:class:`CursesInput` turns key presses into
:class:`~retris.engine.InputEvent` values and :class:`CursesRenderer` draws
:class:`~retris.game_state.RenderSnapshot` frames.  Neither knows anything
about game rules; :func:`play` glues them to a :class:`~retris.engine.Game`.
"""

from __future__ import annotations

import curses
import logging
import math
from typing import Dict, Optional

from .config import GameConfig
from .engine import Game, InputEvent
from .game_state import RenderSnapshot
from .tetromino import PIECE_VALUES, TetrominoType, shape_blocks


LOGGER = logging.getLogger(__name__)

BLOCK = "[]"
GHOST = "::"
EMPTY = "  "

KEY_BINDINGS: Dict[int, InputEvent] = {
    curses.KEY_LEFT: InputEvent.MOVE_LEFT,
    ord("a"): InputEvent.MOVE_LEFT,
    curses.KEY_RIGHT: InputEvent.MOVE_RIGHT,
    ord("d"): InputEvent.MOVE_RIGHT,
    curses.KEY_UP: InputEvent.ROTATE_CW,
    ord("x"): InputEvent.ROTATE_CW,
    ord("z"): InputEvent.ROTATE_CCW,
    curses.KEY_DOWN: InputEvent.SOFT_DROP,
    ord("s"): InputEvent.SOFT_DROP,
    ord(" "): InputEvent.HARD_DROP,
    ord("p"): InputEvent.PAUSE,
    ord("r"): InputEvent.RESTART,
    ord("q"): InputEvent.QUIT,
}

HELP_LINES = (
    "left/right: move",
    "up/x z: rotate",
    "down: soft drop",
    "space: hard drop",
    "p: pause  r: restart",
    "q: quit",
)

# Background colour per shape; registered as colour pair ``PIECE_VALUES[shape]``.
PIECE_COLORS = {
    TetrominoType.I: curses.COLOR_CYAN,
    TetrominoType.J: curses.COLOR_BLUE,
    TetrominoType.L: curses.COLOR_WHITE,
    TetrominoType.O: curses.COLOR_YELLOW,
    TetrominoType.S: curses.COLOR_GREEN,
    TetrominoType.T: curses.COLOR_MAGENTA,
    TetrominoType.Z: curses.COLOR_RED,
}


def map_key(key: int) -> Optional[InputEvent]:
    """Return the event bound to ``key`` (case-insensitive for letters)."""

    if 0 <= key < 256 and chr(key).isalpha():
        key = ord(chr(key).lower())
    return KEY_BINDINGS.get(key)


def init_colors() -> bool:
    """Register one colour pair per piece value; return ``False`` if unsupported."""

    if not curses.has_colors():
        return False
    curses.start_color()
    for shape, color in PIECE_COLORS.items():
        curses.init_pair(PIECE_VALUES[shape], curses.COLOR_BLACK, color)
    return True


class CursesInput:
    """Blocking key reader with a timeout."""

    def __init__(self, screen) -> None:
        self.screen = screen
        self.screen.keypad(True)

    def poll(self, timeout: Optional[float]) -> Optional[InputEvent]:
        delay = -1 if timeout is None else max(0, math.ceil(timeout * 1000))
        self.screen.timeout(delay)
        key = self.screen.getch()
        if key == -1:
            return None
        return map_key(key)


class CursesRenderer:
    """Draw snapshots onto a curses window.

    Cells are two characters wide so blocks look roughly square.  When
    ``colors`` is false, pieces are drawn in reverse video instead.
    """

    def __init__(self, screen, colors: bool = False) -> None:
        self.screen = screen
        self.colors = colors

    def _attr(self, value: int) -> int:
        if self.colors:
            return curses.color_pair(value)
        return curses.A_REVERSE

    def _put(self, y: int, x: int, text: str, attr: int = 0) -> None:
        try:
            self.screen.addstr(y, x, text, attr)
        except curses.error:
            # Writing to the bottom-right corner or past a small window.
            pass

    def __call__(self, snapshot: RenderSnapshot) -> None:
        self.screen.erase()
        top, left = 1, 2
        inner = snapshot.width * 2

        for r in range(snapshot.height):
            self._put(top + r, left, "|")
            self._put(top + r, left + inner + 1, "|")
        self._put(top + snapshot.height, left, "+" + "-" * inner + "+")

        ghost = set(snapshot.ghost_cells) - set(snapshot.active_cells)
        grid = snapshot.composite()
        for r, row in enumerate(grid):
            for c, value in enumerate(row):
                x = left + 1 + c * 2
                if value:
                    self._put(top + r, x, BLOCK, self._attr(value))
                elif (r, c) in ghost:
                    self._put(top + r, x, GHOST)
                else:
                    self._put(top + r, x, EMPTY)

        self._draw_panel(snapshot, top, left + inner + 4)
        self._draw_banner(snapshot, top, left, inner)
        self.screen.refresh()

    def _draw_panel(self, snapshot: RenderSnapshot, top: int, x: int) -> None:
        self._put(top, x, "retris")
        self._put(top + 2, x, f"Score: {snapshot.score}")
        self._put(top + 3, x, f"Level: {snapshot.level}")
        self._put(top + 4, x, f"Lines: {snapshot.lines}")
        self._put(top + 6, x, "Next:")
        if snapshot.upcoming is not None:
            value = PIECE_VALUES[snapshot.upcoming]
            for dr, dc in shape_blocks(snapshot.upcoming, 0):
                self._put(top + 7 + dr, x + dc * 2, BLOCK, self._attr(value))
        for i, line in enumerate(HELP_LINES):
            self._put(top + 12 + i, x, line)

    def _draw_banner(self, snapshot: RenderSnapshot, top: int, left: int, inner: int) -> None:
        middle = top + snapshot.height // 2
        if snapshot.game_over:
            self._put(middle, left + 1, "GAME OVER".center(inner), curses.A_BOLD)
            self._put(middle + 1, left + 1, "r: again q: quit".center(inner))
        elif snapshot.paused:
            self._put(middle, left + 1, "PAUSED".center(inner), curses.A_BOLD)


def play(screen, config: GameConfig) -> RenderSnapshot:
    """Run a full session on ``screen`` and return the final snapshot.

    Intended for :func:`curses.wrapper`, which restores the terminal on exit.
    """

    try:
        curses.curs_set(0)
    except curses.error:
        LOGGER.debug("Terminal cannot hide the cursor")
    colors = init_colors()
    game = Game(config)
    return game.run(CursesInput(screen), CursesRenderer(screen, colors))
