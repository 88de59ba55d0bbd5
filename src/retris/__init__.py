"""Terminal falling-block puzzle game engine."""

from .config import GameConfig
from .controller import (
    ControllerState,
    Direction,
    LockResult,
    MoveOutcome,
    PieceController,
    Rotation,
)
from .engine import Game, InputEvent, InputSource, RenderSink
from .errors import ConfigurationError, InvalidMove, RetrisError, SpawnBlocked
from .game_state import GameState, GameStatus, RenderSnapshot
from .playfield import Playfield
from .randomizer import BagRandomizer, UniformRandomizer, make_randomizer
from .scoring import SCORE_TABLE, ScoreTracker, gravity_interval_ms
from .tetromino import (
    PIECE_VALUES,
    Tetromino,
    TetrominoType,
    rotation_count,
    shape_blocks,
)

__all__ = [
    "BagRandomizer",
    "ConfigurationError",
    "ControllerState",
    "Direction",
    "Game",
    "GameConfig",
    "GameState",
    "GameStatus",
    "InputEvent",
    "InputSource",
    "InvalidMove",
    "LockResult",
    "MoveOutcome",
    "PIECE_VALUES",
    "PieceController",
    "Playfield",
    "RenderSink",
    "RenderSnapshot",
    "RetrisError",
    "Rotation",
    "SCORE_TABLE",
    "ScoreTracker",
    "SpawnBlocked",
    "Tetromino",
    "TetrominoType",
    "UniformRandomizer",
    "gravity_interval_ms",
    "make_randomizer",
    "rotation_count",
    "shape_blocks",
]
