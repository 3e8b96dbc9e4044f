"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import Board, Cell
from .tetromino import Shape

# A freeze that commits any cell above this line ends the game.
HEADROOM = 2

MIN_SPEED = 1
MAX_SPEED = 5

# Offset applied to the next shape's cells for the preview box.
PREVIEW_ORIGIN = (2, -3)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a :class:`GameState` handed to renderers."""

    board: Tuple[Tuple[Cell, ...], ...]
    falling: Tuple[Cell, ...]
    next: Tuple[Cell, ...]
    score: int
    lines: int
    paused: bool
    game_over: bool
    speed: int


@dataclass
class GameState:
    """Mutable state for a Tetris game session."""

    board: Board = field(default_factory=Board)
    falling_shape: Optional[Shape] = None
    next_shape: Optional[Shape] = None
    score: float = 0.0
    lines: int = 0
    paused: bool = False
    game_over: bool = False
    speed: int = MIN_SPEED

    def is_valid(self) -> bool:
        """Return ``True`` if the falling shape fits where it currently is.

        Every visible cell must be inside the board and sit on an empty
        square.  Cells still above the board are filtered out by
        :meth:`Shape.absolute_cells`, so there is no check on the first line.
        Callers move first and roll back when this returns ``False``.
        """

        if self.falling_shape is None:
            return True
        for cell in self.falling_shape.absolute_cells():
            if not (cell.line < self.board.lines and 0 <= cell.column < self.board.columns):
                return False
            if not self.board.is_empty(cell.line, cell.column):
                return False
        return True

    def freeze_shape(self) -> None:
        """Commit the falling shape into the board.

        Committing a cell on a line below :data:`HEADROOM` ends the game.
        Otherwise the next shape becomes the falling one; the caller is
        expected to provide a new ``next_shape`` afterwards.
        """

        if self.falling_shape is None:
            return
        for cell in self.falling_shape.absolute_cells():
            self.board.set_cell(cell.line, cell.column, cell.color)
            if cell.line < HEADROOM:
                self.game_over = True
        if self.game_over:
            self.falling_shape = None
        else:
            self.falling_shape = self.next_shape
            self.next_shape = None

    def complete_lines(self) -> int:
        """Clear every full line, score them and return how many were cleared."""

        cleared = self.board.remove_lines(self.board.full_lines())
        if cleared:
            self.lines += cleared
            self.increase_score(cleared)
        return cleared

    def increase_score(self, n: int) -> None:
        """Add ``n * 100 * (1 + n / 10)`` to the score.

        Written as ``n * 100 * (10 + n) / 10`` so whole results stay exact.
        """

        self.score += n * 100 * (10 + n) / 10

    def snapshot(self) -> Snapshot:
        """Return an immutable view of the state for renderers."""

        falling = self.falling_shape.absolute_cells() if self.falling_shape else []
        upcoming = self.next_shape.absolute_cells(*PREVIEW_ORIGIN) if self.next_shape else []
        return Snapshot(
            board=tuple(tuple(row) for row in self.board),
            falling=tuple(falling),
            next=tuple(upcoming),
            score=int(self.score),
            lines=self.lines,
            paused=self.paused,
            game_over=self.game_over,
            speed=self.speed,
        )
