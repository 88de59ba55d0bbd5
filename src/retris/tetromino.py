"""Tetromino catalog and the falling piece value.

Every shape is drawn inside a 4x4 box.  Rotation states are produced by
turning the box 90 degrees clockwise about its centre until the starting
cells come back, so each shape has between one and four distinct states and
rotation indices form a cycle.  Offsets are ``(row, col)`` pairs relative to
the top-left corner of the box.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

Cell = Tuple[int, int]
RotationState = Tuple[Cell, ...]

BOX_SIZE = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"

    @property
    def value_id(self) -> int:
        """Integer stored in the playfield for cells of this shape."""

        return PIECE_VALUES[self]


# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0`` is
# reserved for empty cells; the values double as colour ids for renderers.
PIECE_VALUES: Dict[TetrominoType, int] = {t: i + 1 for i, t in enumerate(TetrominoType)}

# Spawn orientation of each shape inside its box.
_DIAGRAMS: Dict[TetrominoType, Tuple[str, ...]] = {
    TetrominoType.I: ("..#.", "..#.", "..#.", "..#."),
    TetrominoType.J: ("..#.", "..#.", ".##.", "...."),
    TetrominoType.L: (".#..", ".#..", ".##.", "...."),
    TetrominoType.O: ("....", ".##.", ".##.", "...."),
    TetrominoType.S: (".#..", ".##.", "..#.", "...."),
    TetrominoType.T: ("..#.", ".##.", "..#.", "...."),
    TetrominoType.Z: ("..#.", ".##.", ".#..", "...."),
}


def _parse(diagram: Tuple[str, ...]) -> RotationState:
    return tuple(
        sorted(
            (r, c)
            for r, line in enumerate(diagram)
            for c, ch in enumerate(line)
            if ch != "."
        )
    )


def _rotate(state: RotationState) -> RotationState:
    """Return ``state`` turned 90 degrees clockwise inside the box."""

    last = BOX_SIZE - 1
    return tuple(sorted((c, last - r) for r, c in state))


def _generate_rotations(state: RotationState) -> List[RotationState]:
    """Return the cycle of distinct rotation states starting at ``state``."""

    rotations = [state]
    current = _rotate(state)
    while current != state:
        rotations.append(current)
        current = _rotate(current)
    return rotations


TETROMINO_SHAPES: Dict[TetrominoType, List[RotationState]] = {
    t_type: _generate_rotations(_parse(diagram)) for t_type, diagram in _DIAGRAMS.items()
}


def rotation_count(shape: TetrominoType) -> int:
    """Return how many distinct orientations ``shape`` has."""

    return len(TETROMINO_SHAPES[shape])


def shape_blocks(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    states = TETROMINO_SHAPES[shape]
    return states[rotation % len(states)]


@dataclass(frozen=True)
class Tetromino:
    """Falling piece: shape, orientation and box origin on the playfield."""

    shape: TetrominoType
    rotation: int = 0
    position: Cell = (0, 0)  # (row, col)

    def blocks(self) -> List[Cell]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in shape_blocks(self.shape, self.rotation)]

    def moved(self, drow: int, dcol: int) -> "Tetromino":
        """Return a copy shifted by ``drow`` rows and ``dcol`` columns."""

        row, col = self.position
        return replace(self, position=(row + drow, col + dcol))

    def rotated(self, direction: int = 1) -> "Tetromino":
        """Return a copy turned by one step.

        Positive ``direction`` rotates clockwise, negative counter-clockwise.
        The index wraps around the number of states for the shape.
        """

        step = 1 if direction > 0 else -1
        return replace(self, rotation=(self.rotation + step) % rotation_count(self.shape))
