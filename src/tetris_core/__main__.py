"""Command line entry point for the Tetris engine.

Run with: `python -m tetris_core`

Without options a single ASCII frame is printed, useful as a smoke test that
renderers see more than a blank grid.  ``--ticks`` advances gravity first and
``--pygame`` opens a playable window instead.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from . import Game, GameState, ShapeFactory, TextRenderer
from .game_state import MAX_SPEED, MIN_SPEED


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tetris_core", description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for shape selection.")
    parser.add_argument("--ticks", type=int, default=0, help="Gravity ticks to run before drawing.")
    parser.add_argument(
        "--speed",
        type=int,
        choices=range(MIN_SPEED, MAX_SPEED + 1),
        default=MIN_SPEED,
        help="Initial speed level.",
    )
    parser.add_argument("--pygame", action="store_true", help="Open a playable pygame window.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s"
    )
    game = Game(GameState(speed=args.speed), ShapeFactory(seed=args.seed))
    if args.pygame:
        from .run_pygame import main as run_window

        run_window(game)
        return
    for _ in range(args.ticks):
        game.tick()
    game.draw(TextRenderer())


if __name__ == "__main__":
    main()
