"""Exception types raised by the game engine."""

from __future__ import annotations


class RetrisError(Exception):
    """Base class for all engine errors."""


class InvalidMove(RetrisError):
    """A piece operation was requested while no piece is falling.

    Moves that are merely blocked by walls or locked cells are not errors;
    they are reported as :attr:`retris.controller.MoveOutcome.REJECTED`.
    """


class SpawnBlocked(RetrisError):
    """The cells for a freshly spawned piece are already occupied."""


class ConfigurationError(RetrisError, ValueError):
    """Invalid game settings detected at start-up."""
