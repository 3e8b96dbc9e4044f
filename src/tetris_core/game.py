"""Game controller driving a :class:`GameState` from ticks and input."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Optional, Union

from .game_state import MAX_SPEED, MIN_SPEED, GameState
from .render import Renderer
from .tetromino import ShapeFactory


LOGGER = logging.getLogger(__name__)


class Command(str, Enum):
    """Discrete player commands understood by :meth:`Game.on_input`."""

    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    SOFT_DROP = "soft-drop"
    ROTATE = "rotate"
    PAUSE = "pause"
    SPEED_UP = "speed-up"
    SPEED_DOWN = "speed-down"


def _parse_command(command: Union[Command, str]) -> Optional[Command]:
    try:
        return Command(command)
    except ValueError:
        return None


class Game:
    """One play session: a state, a shape factory and the rules tying them.

    ``tick`` and ``on_input`` never interleave; both take the same lock, so a
    host may call them from a timer thread and an input thread alike.
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        factory: Optional[ShapeFactory] = None,
    ) -> None:
        self.state = state if state is not None else GameState()
        self.factory = factory if factory is not None else ShapeFactory()
        self._lock = threading.RLock()
        # One rejected gravity step is forgiven before the shape freezes.
        self._grace = True
        if self.state.falling_shape is None:
            self.state.falling_shape = self.factory.create_random_shape()
        if self.state.next_shape is None:
            self.state.next_shape = self.factory.create_random_shape()

    @property
    def running(self) -> bool:
        return not (self.state.paused or self.state.game_over)

    def tick(self) -> None:
        """Advance gravity by one line."""

        with self._lock:
            state = self.state
            if not self.running or state.falling_shape is None:
                return
            state.falling_shape.move(1, 0)
            if state.is_valid():
                self._grace = True
                return
            state.falling_shape.move(-1, 0)
            if self._grace:
                self._grace = False
                return
            self._settle()

    def _settle(self) -> None:
        state = self.state
        frozen = state.falling_shape
        state.freeze_shape()
        LOGGER.debug("Froze shape %s", frozen.name if frozen else "?")
        cleared = state.complete_lines()
        if cleared:
            LOGGER.debug("Cleared %d line(s). Score: %d", cleared, int(state.score))
        self._grace = True
        if state.game_over:
            LOGGER.info("Game over. Score: %d", int(state.score))
            return
        state.next_shape = self.factory.create_random_shape()

    def on_input(self, command: Union[Command, str]) -> None:
        """Apply a player command; unknown commands are ignored."""

        parsed = _parse_command(command)
        if parsed is None:
            LOGGER.debug("Ignoring unknown command %r", command)
            return
        with self._lock:
            if parsed is Command.PAUSE:
                self.state.paused = not self.state.paused
                LOGGER.info("Paused" if self.state.paused else "Resumed")
            elif parsed is Command.SPEED_UP:
                self.state.speed = min(MAX_SPEED, self.state.speed + 1)
            elif parsed is Command.SPEED_DOWN:
                self.state.speed = max(MIN_SPEED, self.state.speed - 1)
            elif self.running and self.state.falling_shape is not None:
                self._play(parsed)

    def _play(self, command: Command) -> None:
        state = self.state
        shape = state.falling_shape
        if command is Command.MOVE_LEFT or command is Command.MOVE_RIGHT:
            step = -1 if command is Command.MOVE_LEFT else 1
            shape.move(0, step)
            if not state.is_valid():
                shape.move(0, -step)
        elif command is Command.ROTATE:
            shape.rotate()
            if not state.is_valid():
                shape.undo_rotate()
        elif command is Command.SOFT_DROP:
            self.tick()

    def draw(self, renderer: Renderer) -> None:
        """Hand a snapshot of the current state to ``renderer``."""

        with self._lock:
            snapshot = self.state.snapshot()
        renderer.draw(snapshot)
