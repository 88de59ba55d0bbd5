"""Tunable game settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError
from .tetromino import BOX_SIZE


RANDOMIZERS = ("bag", "uniform")


@dataclass(frozen=True)
class GameConfig:
    """Settings for a single game session.

    ``width`` and ``height`` are the playfield dimensions in cells.  Gravity
    is expressed in milliseconds: the delay at level ``n`` is
    ``max(min_gravity_ms, base_gravity_ms * gravity_decay ** n)``.
    """

    width: int = 10
    height: int = 20
    lines_per_level: int = 10
    base_gravity_ms: float = 800.0
    gravity_decay: float = 0.85
    min_gravity_ms: float = 50.0
    wall_kicks: bool = True
    randomizer: str = "bag"
    seed: Optional[int] = None

    def validate(self) -> "GameConfig":
        """Return ``self`` or raise :class:`ConfigurationError`."""

        if self.width < BOX_SIZE or self.height < BOX_SIZE:
            raise ConfigurationError(
                f"Playfield must be at least {BOX_SIZE}x{BOX_SIZE}, "
                f"got {self.width}x{self.height}"
            )
        if self.lines_per_level <= 0:
            raise ConfigurationError("lines_per_level must be positive")
        if self.base_gravity_ms <= 0 or self.min_gravity_ms <= 0:
            raise ConfigurationError("Gravity intervals must be positive")
        if not 0 < self.gravity_decay <= 1:
            raise ConfigurationError("gravity_decay must be in (0, 1]")
        if self.randomizer not in RANDOMIZERS:
            raise ConfigurationError(f"Unknown randomizer: {self.randomizer}")
        return self

    @classmethod
    def from_args(cls, args) -> "GameConfig":
        """Build a validated config from parsed command-line arguments."""

        return cls(
            width=args.width,
            height=args.height,
            lines_per_level=args.lines_per_level,
            wall_kicks=not args.no_wall_kicks,
            randomizer=args.randomizer,
            seed=args.seed,
        ).validate()
