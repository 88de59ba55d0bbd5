"""Playfield grid holding the locked cells."""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import ConfigurationError
from .tetromino import BOX_SIZE, Cell


# Dimensions of the standard Tetris playfield.
WIDTH = 10
HEIGHT = 20

EMPTY = 0

Grid = NDArray[np.uint8]


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Playfield:
    """Fixed-size grid of cells; ``0`` is empty, anything else is occupied."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width < BOX_SIZE or height < BOX_SIZE:
            raise ConfigurationError(
                f"Playfield must be at least {BOX_SIZE}x{BOX_SIZE}, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def reset(self) -> None:
        """Empty every cell."""

        self.grid = create_empty_grid(self.width, self.height)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"({row}, {col}) is outside the {self.width}x{self.height} playfield")

    def get_cell(self, row: int, col: int) -> int:
        """Return the piece value stored at ``(row, col)``, ``0`` when empty.

        Raises:
            IndexError: If the coordinates are off the playfield.
        """
        self._check(row, col)
        return int(self.grid[row, col])

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Store a piece value at ``(row, col)``; mostly used to build test layouts.

        Raises:
            IndexError: If the coordinates are off the playfield.
        """
        self._check(row, col)
        self.grid[row, col] = np.uint8(value)

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if a piece may occupy ``(row, col)``.

        Walls and the floor count as filled, so a cell off the playfield is
        never empty.
        """

        return self.in_bounds(row, col) and bool(self.grid[row, col] == EMPTY)

    def is_free(self, cells: Iterable[Cell]) -> bool:
        """Return ``True`` if every cell is inside the grid and empty."""

        return all(self.is_empty(row, col) for row, col in cells)

    def merge(self, cells: Iterable[Cell], value: int) -> None:
        """Mark ``cells`` as occupied by ``value``.

        The caller must have checked :meth:`is_free` for the same cells.
        """

        coordinates = np.asarray(list(cells), dtype=np.int16)
        if coordinates.size == 0:
            return
        rows, cols = coordinates.T
        self.grid[rows, cols] = np.uint8(value)

    def clear_completed_rows(self) -> int:
        """Remove every row with no gaps at once and return the line count.

        Surviving rows keep their order and settle at the bottom; the rows
        freed at the top come back empty.  A playfield without complete rows
        is left untouched.
        """

        complete = (self.grid != EMPTY).all(axis=1)
        cleared = int(complete.sum())
        if cleared:
            compacted = create_empty_grid(self.width, self.height)
            compacted[cleared:] = self.grid[~complete]
            self.grid = compacted
        return cleared

    def top_row_blocked(self, cells: Iterable[Cell]) -> bool:
        """Return ``True`` if any spawn-zone cell in ``cells`` is occupied."""

        return any(
            self.in_bounds(row, col) and self.grid[row, col] != EMPTY for row, col in cells
        )

    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        """Return an immutable copy of the grid."""

        return tuple(tuple(int(v) for v in row) for row in self.grid)
