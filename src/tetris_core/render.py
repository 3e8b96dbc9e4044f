"""Renderer interface and a plain-text implementation."""

from __future__ import annotations

import sys
from typing import List, Optional, Protocol, TextIO

from .game_state import Snapshot
from .utils import render_grid

SPEED_GLYPH = "*"
PREVIEW_LINES = 4
PREVIEW_COLUMNS = 4


class Renderer(Protocol):
    """Anything able to draw a :class:`Snapshot`.

    Renderers only read the snapshot; they never hold on to or change the
    game state it was taken from.
    """

    def draw(self, snapshot: Snapshot) -> None: ...


def speed_bar(speed: int) -> str:
    return SPEED_GLYPH * speed


def _preview_rows(snapshot: Snapshot) -> List[str]:
    rows = [["."] * PREVIEW_COLUMNS for _ in range(PREVIEW_LINES)]
    for cell in snapshot.next:
        line, column = int(cell.line), int(cell.column)
        if 0 <= line < PREVIEW_LINES and 0 <= column < PREVIEW_COLUMNS:
            rows[line][column] = "#"
    return ["".join(row) for row in rows]


class TextRenderer:
    """Render frames as lines of ``#`` and ``.`` characters."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream
        self.last_frame: List[str] = []

    def frame(self, snapshot: Snapshot) -> List[str]:
        """Return the text lines making up one frame."""

        lines = ["".join("." if not color else "#" for color in row)
                 for row in render_grid(snapshot)]
        lines.append("")
        lines.append(f"Score: {snapshot.score}")
        lines.append(f"Lines: {snapshot.lines}")
        lines.append(f"Speed: {speed_bar(snapshot.speed)}")
        lines.append("Next:")
        lines.extend(_preview_rows(snapshot))
        if snapshot.game_over:
            lines.append("GAME OVER")
        elif snapshot.paused:
            lines.append("PAUSED")
        return lines

    def draw(self, snapshot: Snapshot) -> None:
        self.last_frame = self.frame(snapshot)
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write("\n".join(self.last_frame) + "\n")
