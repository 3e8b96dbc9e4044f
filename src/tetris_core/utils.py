"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .game_state import MAX_SPEED, MIN_SPEED

if TYPE_CHECKING:
    from .game_state import Snapshot


BASE_TICK_MS = 800


def tick_interval_ms(speed: int) -> float:
    """Return the delay in milliseconds between gravity ticks at ``speed``.

    Each speed level shortens the interval by a third; speed ``1`` waits
    :data:`BASE_TICK_MS`.

    Raises:
        ValueError: If ``speed`` is outside ``[MIN_SPEED, MAX_SPEED]``.
    """

    if not MIN_SPEED <= speed <= MAX_SPEED:
        raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}: {speed}")
    return BASE_TICK_MS * (2 / 3) ** (speed - 1)


def render_grid(snapshot: "Snapshot") -> List[List[str]]:
    """Return the board colours with the falling shape overlaid.

    Empty squares are ``""``.  The result is a fresh list so renderers can
    annotate it freely without touching the snapshot.
    """

    grid = [[cell.color for cell in row] for row in snapshot.board]
    for cell in snapshot.falling:
        line, column = int(cell.line), int(cell.column)
        if 0 <= line < len(grid) and 0 <= column < len(grid[line]):
            grid[line][column] = cell.color
    return grid
