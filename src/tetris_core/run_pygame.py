"""Simple pygame front-end for the Tetris engine.

The module glues a :class:`~tetris_core.game.Game` session to ``pygame``: key
presses become :class:`~tetris_core.game.Command` values, a drop timer calls
:meth:`Game.tick` at the cadence of the current speed, and every frame is
drawn from a :class:`~tetris_core.game_state.Snapshot`.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import pygame

from .board import COLUMNS, LINES, Cell
from .game import Command, Game
from .game_state import Snapshot
from .render import PREVIEW_COLUMNS, PREVIEW_LINES, speed_bar
from .utils import tick_interval_ms

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60
# Width of the side panel holding the preview and score
PANEL_WIDTH = 6 * CELL_SIZE

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)

KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_p: Command.PAUSE,
    pygame.K_PLUS: Command.SPEED_UP,
    pygame.K_EQUALS: Command.SPEED_UP,
    pygame.K_KP_PLUS: Command.SPEED_UP,
    pygame.K_MINUS: Command.SPEED_DOWN,
    pygame.K_KP_MINUS: Command.SPEED_DOWN,
}


def command_for_key(key: int) -> Optional[Command]:
    """Return the command bound to ``key`` or ``None`` if it is unbound."""

    return KEY_COMMANDS.get(key)


def _draw_cell(screen: pygame.Surface, cell: Cell, x0: int = 0, y0: int = 0) -> None:
    rect = pygame.Rect(
        x0 + int(cell.column) * CELL_SIZE,
        y0 + int(cell.line) * CELL_SIZE,
        CELL_SIZE,
        CELL_SIZE,
    )
    pygame.draw.rect(screen, pygame.Color(cell.color), rect)
    pygame.draw.rect(screen, GRID_LINE, rect, 1)


class PygameRenderer:
    """Draw snapshots onto a pygame surface."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self._font = pygame.font.Font(None, 24)

    def draw(self, snapshot: Snapshot) -> None:
        self.screen.fill(BACKGROUND)
        for row in snapshot.board:
            for cell in row:
                rect = pygame.Rect(
                    cell.column * CELL_SIZE, cell.line * CELL_SIZE, CELL_SIZE, CELL_SIZE
                )
                if not cell.is_empty:
                    pygame.draw.rect(self.screen, pygame.Color(cell.color), rect)
                pygame.draw.rect(self.screen, GRID_LINE, rect, 1)
        for cell in snapshot.falling:
            _draw_cell(self.screen, cell)
        self._draw_panel(snapshot)
        status = "Game Over - " if snapshot.game_over else "Paused - " if snapshot.paused else ""
        pygame.display.set_caption(f"Tetris - {status}Score: {snapshot.score}")
        pygame.display.flip()

    def _draw_panel(self, snapshot: Snapshot) -> None:
        x0 = COLUMNS * CELL_SIZE + CELL_SIZE // 2
        y0 = CELL_SIZE
        preview = pygame.Rect(x0, y0, PREVIEW_COLUMNS * CELL_SIZE, PREVIEW_LINES * CELL_SIZE)
        pygame.draw.rect(self.screen, GRID_LINE, preview, 1)
        for cell in snapshot.next:
            _draw_cell(self.screen, cell, x0, y0)
        texts = [
            f"Score: {snapshot.score}",
            f"Lines: {snapshot.lines}",
            f"Speed: {speed_bar(snapshot.speed)}",
        ]
        if snapshot.game_over:
            texts.append("GAME OVER")
        elif snapshot.paused:
            texts.append("PAUSED")
        y = y0 + preview.height + CELL_SIZE
        for text in texts:
            surface = self._font.render(text, True, TEXT_COLOR)
            self.screen.blit(surface, (x0, y))
            y += CELL_SIZE


class GameRunner:
    """Manage the game loop with start/stop controls."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self._game = game
        self._running = False
        self._task: asyncio.Task | None = None
        self._clock: pygame.time.Clock | None = None
        self._drop_timer = 0.0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def game(self) -> Optional[Game]:
        return self._game

    def advance(self, dt: float) -> bool:
        """Accumulate ``dt`` milliseconds and tick once the interval elapsed.

        Returns ``True`` when a tick was issued.
        """

        if self._game is None:
            return False
        self._drop_timer += dt
        if self._drop_timer < tick_interval_ms(self._game.state.speed):
            return False
        self._drop_timer = 0.0
        self._game.tick()
        return True

    def handle_key(self, key: int) -> None:
        command = command_for_key(key)
        if command is not None and self._game is not None:
            self._game.on_input(command)

    async def _run_loop(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        screen = pygame.display.set_mode((COLUMNS * CELL_SIZE + PANEL_WIDTH, LINES * CELL_SIZE))
        pygame.display.set_caption("Tetris")
        renderer = PygameRenderer(screen)
        self._clock = pygame.time.Clock()

        if self._game is None:
            self._game = Game()
        LOGGER.info("Game started")

        self._drop_timer = 0.0
        self._running = True
        while self._running:
            dt = self._clock.tick(FPS)
            # Pause is handled by the game itself, so keys are always forwarded
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)

            self.advance(dt)
            self._game.draw(renderer)

            # Yield to the browser/host event loop to keep UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (e.g., plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main(game: Optional[Game] = None) -> None:
    """Run a game window until it is closed."""

    GameRunner(game).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
