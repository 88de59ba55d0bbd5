"""Policies for choosing the next tetromino shape."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .errors import ConfigurationError
from .tetromino import TetrominoType


class UniformRandomizer:
    """Pick every shape independently with equal probability."""

    def __init__(
        self,
        seed: Optional[int] = None,
        shapes: Sequence[TetrominoType] = tuple(TetrominoType),
    ) -> None:
        if not shapes:
            raise ConfigurationError("Piece catalog is empty")
        self._rng = random.Random(seed)
        self._shapes = list(shapes)

    def next_shape(self) -> TetrominoType:
        return self._rng.choice(self._shapes)


class BagRandomizer:
    """Deal shuffled bags containing one of each shape.

    Every shape appears exactly once in each consecutive group of
    ``len(shapes)`` draws, so no shape can be starved.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        shapes: Sequence[TetrominoType] = tuple(TetrominoType),
    ) -> None:
        if not shapes:
            raise ConfigurationError("Piece catalog is empty")
        self._rng = random.Random(seed)
        self._shapes = list(shapes)
        self._bag: List[TetrominoType] = []

    def _refill(self) -> None:
        bag = list(self._shapes)
        self._rng.shuffle(bag)
        self._bag.extend(bag)

    def next_shape(self) -> TetrominoType:
        if not self._bag:
            self._refill()
        return self._bag.pop(0)


def make_randomizer(name: str, seed: Optional[int] = None):
    """Return the randomizer registered under ``name``."""

    if name == "bag":
        return BagRandomizer(seed)
    if name == "uniform":
        return UniformRandomizer(seed)
    raise ConfigurationError(f"Unknown randomizer: {name}")
