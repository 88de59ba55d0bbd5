"""Score, level and gravity speed bookkeeping."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict


LOGGER = logging.getLogger(__name__)

# Points per clear event at level 0, keyed by rows cleared at once.
SCORE_TABLE: Dict[int, int] = {
    1: 40,
    2: 100,
    3: 300,
    4: 1200,
}

BASE_GRAVITY_MS = 800.0
GRAVITY_DECAY = 0.85
MIN_GRAVITY_MS = 50.0


def gravity_interval_ms(
    level: int,
    base: float = BASE_GRAVITY_MS,
    decay: float = GRAVITY_DECAY,
    floor: float = MIN_GRAVITY_MS,
) -> float:
    """Return the fall interval in milliseconds for ``level``.

    The interval shrinks geometrically as the level rises but never drops
    below ``floor``.
    """

    return max(floor, base * (decay ** level))


def points_for(rows: int, level: int = 0) -> int:
    """Return the score awarded for clearing ``rows`` at once on ``level``."""

    if rows <= 0:
        return 0
    return SCORE_TABLE[min(rows, max(SCORE_TABLE))] * (level + 1)


@dataclass
class ScoreTracker:
    """Accumulate cleared lines and derive score and level from them."""

    lines_per_level: int = 10
    score: int = 0
    lines: int = 0
    level: int = 0

    def record(self, rows: int) -> int:
        """Register a clear event of ``rows`` rows and return the points."""

        if rows <= 0:
            return 0
        points = points_for(rows, self.level)
        self.score += points
        self.lines += rows
        level = self.lines // self.lines_per_level
        if level != self.level:
            LOGGER.info("Level up: %d", level)
            self.level = level
        return points

    def reset(self) -> None:
        self.score = 0
        self.lines = 0
        self.level = 0
