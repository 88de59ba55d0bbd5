"""High level game state container and the read-only render snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .controller import PieceController
from .playfield import Playfield
from .scoring import ScoreTracker
from .tetromino import Cell, TetrominoType


class GameStatus(str, Enum):
    RUNNING = "running"
    GAME_OVER = "game-over"
    EXITED = "exited"


@dataclass
class GameState:
    """Mutable state for one game session.

    The playfield, controller and tracker are owned exclusively by the
    session; only :class:`retris.engine.Game` mutates them.
    """

    playfield: Playfield
    controller: PieceController
    tracker: ScoreTracker = field(default_factory=ScoreTracker)
    status: GameStatus = GameStatus.RUNNING
    paused: bool = False

    def reset(self) -> None:
        """Reset the entire game state for a new game."""

        self.playfield.reset()
        self.controller.reset()
        self.tracker.reset()
        self.status = GameStatus.RUNNING
        self.paused = False

    def snapshot(self) -> "RenderSnapshot":
        active = self.controller.active
        ghost = self.controller.ghost()
        return RenderSnapshot(
            grid=self.playfield.rows(),
            active_cells=tuple(active.blocks()) if active else (),
            active_value=active.shape.value_id if active else 0,
            ghost_cells=tuple(ghost.blocks()) if ghost else (),
            upcoming=self.controller.upcoming,
            score=self.tracker.score,
            level=self.tracker.level,
            lines=self.tracker.lines,
            status=self.status,
            paused=self.paused,
        )


@dataclass(frozen=True)
class RenderSnapshot:
    """Everything a renderer needs to draw one frame."""

    grid: Tuple[Tuple[int, ...], ...]
    active_cells: Tuple[Cell, ...]
    active_value: int
    ghost_cells: Tuple[Cell, ...]
    upcoming: Optional[TetrominoType]
    score: int
    level: int
    lines: int
    status: GameStatus
    paused: bool = False

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def composite(self) -> List[List[int]]:
        """Return a copy of the grid with the active piece overlaid.

        Convenient for renderers that want a single 2D array without the
        piece being locked into the playfield.
        """

        grid = [list(row) for row in self.grid]
        for r, c in self.active_cells:
            if 0 <= r < self.height and 0 <= c < self.width:
                grid[r][c] = self.active_value
        return grid
