"""Active piece controller: spawning, movement, rotation and locking.

The controller owns the single falling :class:`~retris.tetromino.Tetromino`
and validates every candidate position against the
:class:`~retris.playfield.Playfield` before committing it.  A rejected move
leaves the piece untouched; a rejected downward move locks the piece.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .errors import InvalidMove, SpawnBlocked
from .playfield import Playfield
from .randomizer import BagRandomizer
from .tetromino import BOX_SIZE, Cell, Tetromino, TetrominoType, shape_blocks


LOGGER = logging.getLogger(__name__)

# Column offsets tried in order when a rotation collides.
KICK_OFFSETS = (-1, 1, -2, 2)


class ControllerState(str, Enum):
    NO_PIECE = "no-piece"
    FALLING = "falling"
    LOCKED = "locked"


class Direction(Enum):
    """Translation requests as ``(drow, dcol)``."""

    LEFT = (0, -1)
    RIGHT = (0, 1)
    DOWN = (1, 0)


class Rotation(Enum):
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1


class MoveOutcome(str, Enum):
    MOVED = "moved"
    REJECTED = "rejected"
    LOCKED = "locked"


@dataclass(frozen=True)
class LockResult:
    """What happened when a piece was locked into the playfield."""

    cells: Tuple[Cell, ...]
    lines_cleared: int
    blocked: bool


class PieceController:
    """Drive the falling piece on ``playfield``.

    ``randomizer`` is any object with a ``next_shape()`` method.  When
    ``wall_kicks`` is enabled a colliding rotation is retried with small
    sideways offsets before being rejected.
    """

    def __init__(
        self,
        playfield: Playfield,
        randomizer=None,
        *,
        wall_kicks: bool = True,
    ) -> None:
        self.playfield = playfield
        self.randomizer = randomizer or BagRandomizer()
        self.wall_kicks = wall_kicks
        self.state = ControllerState.NO_PIECE
        self.active: Optional[Tetromino] = None
        self.upcoming: TetrominoType = self.randomizer.next_shape()
        self.last_lock: Optional[LockResult] = None

    # Geometry helpers -------------------------------------------------
    def spawn_piece(self, shape: TetrominoType) -> Tetromino:
        """Return ``shape`` at its spawn position without placing it.

        The box is centred horizontally and lowered so the topmost cell of the
        spawn orientation sits on row 0.
        """

        top = min(dr for dr, _ in shape_blocks(shape, 0))
        col = (self.playfield.width - BOX_SIZE) // 2
        return Tetromino(shape, rotation=0, position=(-top, col))

    def spawn_cells(self, shape: TetrominoType) -> List[Cell]:
        return self.spawn_piece(shape).blocks()

    def ghost(self) -> Optional[Tetromino]:
        """Return where the falling piece would land on a hard drop."""

        if self.active is None:
            return None
        piece = self.active
        while self.playfield.is_free(piece.moved(1, 0).blocks()):
            piece = piece.moved(1, 0)
        return piece

    def _require_falling(self) -> Tetromino:
        if self.state is not ControllerState.FALLING or self.active is None:
            raise InvalidMove(f"No falling piece (state: {self.state.value})")
        return self.active

    # Transitions ------------------------------------------------------
    def spawn(self, shape: Optional[TetrominoType] = None) -> Tetromino:
        """Place the next piece at the top of the playfield.

        ``shape`` overrides the upcoming piece; otherwise the upcoming piece
        is used and a new one is drawn from the randomizer.

        Raises:
            SpawnBlocked: If the spawn cells are already occupied.
        """

        if self.state is ControllerState.FALLING:
            raise InvalidMove("A piece is already falling")
        if shape is None:
            shape = self.upcoming
            self.upcoming = self.randomizer.next_shape()
        piece = self.spawn_piece(shape)
        if not self.playfield.is_free(piece.blocks()):
            self.active = None
            self.state = ControllerState.NO_PIECE
            raise SpawnBlocked(f"Cannot spawn {shape.value} at {piece.position}")
        self.active = piece
        self.state = ControllerState.FALLING
        LOGGER.debug("Spawned %s at %s", shape.value, piece.position)
        return piece

    def move(self, direction: Direction) -> MoveOutcome:
        """Shift the piece one cell in ``direction`` if there is room."""

        piece = self._require_falling()
        drow, dcol = direction.value
        candidate = piece.moved(drow, dcol)
        if self.playfield.is_free(candidate.blocks()):
            self.active = candidate
            return MoveOutcome.MOVED
        if direction is Direction.DOWN:
            self.lock()
            return MoveOutcome.LOCKED
        return MoveOutcome.REJECTED

    def rotate(self, rotation: Rotation) -> MoveOutcome:
        """Turn the piece one step, trying wall kicks when enabled."""

        piece = self._require_falling()
        candidate = piece.rotated(rotation.value)
        offsets = (0,) + KICK_OFFSETS if self.wall_kicks else (0,)
        for dcol in offsets:
            kicked = candidate.moved(0, dcol)
            if self.playfield.is_free(kicked.blocks()):
                self.active = kicked
                return MoveOutcome.MOVED
        return MoveOutcome.REJECTED

    def hard_drop(self) -> LockResult:
        """Drop the piece as far as it goes and lock it."""

        self._require_falling()
        self.active = self.ghost()
        return self.lock()

    def lock(self) -> LockResult:
        """Merge the piece into the playfield and clear completed rows."""

        piece = self._require_falling()
        self.state = ControllerState.LOCKED
        cells = tuple(piece.blocks())
        self.playfield.merge(cells, piece.shape.value_id)
        cleared = self.playfield.clear_completed_rows()
        blocked = self.playfield.top_row_blocked(self.spawn_cells(self.upcoming))
        self.active = None
        self.state = ControllerState.NO_PIECE
        self.last_lock = LockResult(cells=cells, lines_cleared=cleared, blocked=blocked)
        LOGGER.debug("Locked %s at %s, cleared %d", piece.shape.value, piece.position, cleared)
        return self.last_lock

    def reset(self) -> None:
        """Drop the active piece.

        The upcoming shape is kept so the previewed piece is the first one
        of the next game.
        """

        self.active = None
        self.state = ControllerState.NO_PIECE
        self.last_lock = None
