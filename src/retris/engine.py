"""Game loop tying input, gravity, scoring and rendering together.

:class:`Game` owns a single :class:`~retris.game_state.GameState`.  Input
events and gravity ticks are applied one at a time through :meth:`Game.handle`
and :meth:`Game.tick`; :meth:`Game.run` is the event loop that blocks on an
input source with a timeout equal to the time left until the next tick.

Example
-------

>>> from retris.engine import Game, InputEvent
>>> game = Game()
>>> game.handle(InputEvent.HARD_DROP)
>>> game.snapshot().score >= 0
True
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional, Protocol

from .config import GameConfig
from .controller import ControllerState, Direction, LockResult, MoveOutcome, PieceController, Rotation
from .errors import SpawnBlocked
from .game_state import GameState, GameStatus, RenderSnapshot
from .playfield import Playfield
from .randomizer import make_randomizer
from .scoring import ScoreTracker, gravity_interval_ms


LOGGER = logging.getLogger(__name__)


class InputEvent(str, Enum):
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    ROTATE_CW = "rotate-cw"
    ROTATE_CCW = "rotate-ccw"
    SOFT_DROP = "soft-drop"
    HARD_DROP = "hard-drop"
    PAUSE = "pause"
    RESTART = "restart"
    QUIT = "quit"


class InputSource(Protocol):
    def poll(self, timeout: Optional[float]) -> Optional[InputEvent]:
        """Wait up to ``timeout`` seconds for an event.

        ``None`` blocks until an event arrives.  Returns ``None`` when the
        timeout elapses without input.
        """


RenderSink = Callable[[RenderSnapshot], None]

_MOVES = {
    InputEvent.MOVE_LEFT: Direction.LEFT,
    InputEvent.MOVE_RIGHT: Direction.RIGHT,
}
_ROTATIONS = {
    InputEvent.ROTATE_CW: Rotation.CLOCKWISE,
    InputEvent.ROTATE_CCW: Rotation.COUNTER_CLOCKWISE,
}


class Game:
    """One game session.

    Parameters
    ----------
    config:
        Session settings; validated on construction.
    randomizer:
        Object with ``next_shape()``.  Defaults to the policy named in
        ``config``.
    clock:
        Callable returning monotonic seconds.  Tests inject a fake clock so
        gravity can be driven without waiting.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        randomizer=None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self._clock = clock or time.monotonic
        playfield = Playfield(self.config.width, self.config.height)
        controller = PieceController(
            playfield,
            randomizer or make_randomizer(self.config.randomizer, self.config.seed),
            wall_kicks=self.config.wall_kicks,
        )
        self.state = GameState(
            playfield=playfield,
            controller=controller,
            tracker=ScoreTracker(lines_per_level=self.config.lines_per_level),
        )
        LOGGER.info("Game started (%dx%d)", playfield.width, playfield.height)
        self._spawn()

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def gravity_interval(self) -> float:
        """Seconds between gravity ticks at the current level."""

        cfg = self.config
        return (
            gravity_interval_ms(
                self.state.tracker.level,
                base=cfg.base_gravity_ms,
                decay=cfg.gravity_decay,
                floor=cfg.min_gravity_ms,
            )
            / 1000.0
        )

    def snapshot(self) -> RenderSnapshot:
        return self.state.snapshot()

    # State transitions ------------------------------------------------
    def _spawn(self) -> None:
        try:
            self.state.controller.spawn()
        except SpawnBlocked as exc:
            LOGGER.debug("%s", exc)
            self._game_over()

    def _game_over(self) -> None:
        self.state.status = GameStatus.GAME_OVER
        LOGGER.info("Game over. Final score: %d", self.state.tracker.score)

    def _resolve_lock(self, result: LockResult) -> None:
        tracker = self.state.tracker
        if tracker.record(result.lines_cleared):
            LOGGER.info("Cleared %d row(s). Score: %d", result.lines_cleared, tracker.score)
        if result.blocked:
            self._game_over()
            return
        self._spawn()

    def restart(self) -> None:
        """Throw away the current session and start a fresh one."""

        LOGGER.info("Restarting")
        self.state.reset()
        self._spawn()

    def _playable(self) -> bool:
        return (
            self.state.status is GameStatus.RUNNING
            and not self.state.paused
            and self.state.controller.state is ControllerState.FALLING
        )

    def tick(self) -> None:
        """Apply one gravity step."""

        if not self._playable():
            return
        controller = self.state.controller
        if controller.move(Direction.DOWN) is MoveOutcome.LOCKED:
            self._resolve_lock(controller.last_lock)

    def handle(self, event: InputEvent) -> None:
        """Apply a single input event.

        Nothing is applied once the session has exited.
        """

        if self.state.status is GameStatus.EXITED:
            return
        if event is InputEvent.QUIT:
            self.state.status = GameStatus.EXITED
            LOGGER.info("Quit")
            return
        if event is InputEvent.RESTART:
            self.restart()
            return
        if event is InputEvent.PAUSE and self.state.status is GameStatus.RUNNING:
            self.state.paused = not self.state.paused
            LOGGER.info("Paused" if self.state.paused else "Resumed")
            return
        if not self._playable():
            return

        controller: PieceController = self.state.controller
        if event in _MOVES:
            controller.move(_MOVES[event])
        elif event in _ROTATIONS:
            controller.rotate(_ROTATIONS[event])
        elif event is InputEvent.SOFT_DROP:
            if controller.move(Direction.DOWN) is MoveOutcome.LOCKED:
                self._resolve_lock(controller.last_lock)
        elif event is InputEvent.HARD_DROP:
            self._resolve_lock(controller.hard_drop())

    # Event loop -------------------------------------------------------
    def run(self, source: InputSource, sink: RenderSink) -> RenderSnapshot:
        """Run until a quit event and return the final snapshot.

        The loop waits on ``source`` for at most the time remaining until the
        next gravity tick.  While paused or after game over it blocks without
        a timeout since nothing advances on its own.  Pausing keeps the time
        left until the next tick and resuming picks up from there.
        """

        snapshot = self.snapshot()
        sink(snapshot)
        deadline = self._clock() + self.gravity_interval
        remaining = self.gravity_interval
        while self.state.status is not GameStatus.EXITED:
            ticking = self.state.status is GameStatus.RUNNING and not self.state.paused
            timeout = max(0.0, deadline - self._clock()) if ticking else None

            event = source.poll(timeout)
            changed = False
            if event is not None:
                was_paused = self.state.paused
                self.handle(event)
                changed = True
                if event is InputEvent.RESTART:
                    deadline = self._clock() + self.gravity_interval
                elif self.state.paused and not was_paused:
                    remaining = max(0.0, deadline - self._clock())
                elif was_paused and not self.state.paused:
                    deadline = self._clock() + remaining

            if self._playable() and self._clock() >= deadline:
                self.tick()
                deadline = self._clock() + self.gravity_interval
                changed = True

            if changed:
                snapshot = self.snapshot()
                sink(snapshot)
        return snapshot
