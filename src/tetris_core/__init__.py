"""Tetris game-state engine with pluggable renderers."""

from .board import COLUMNS, LINES, Board, Cell
from .tetromino import CATALOG, Shape, ShapeFactory, ShapeTemplate
from .game_state import GameState, Snapshot
from .game import Command, Game
from .render import Renderer, TextRenderer
from .utils import render_grid, tick_interval_ms

__all__ = [
    "Board",
    "Cell",
    "COLUMNS",
    "LINES",
    "Shape",
    "ShapeFactory",
    "ShapeTemplate",
    "CATALOG",
    "GameState",
    "Snapshot",
    "Command",
    "Game",
    "Renderer",
    "TextRenderer",
    "render_grid",
    "tick_interval_ms",
]
