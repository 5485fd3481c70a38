"""Headless ASCII demo for the engine.

Run with: `python -m tetris_engine`

The demo plays a seeded session with nothing but gravity and random input,
then prints the final board and score.  It doubles as a smoke test that the
engine runs end to end without a renderer.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from .board import Board
from .utils import format_grid, render_grid


LOGGER = logging.getLogger(__name__)


def play(board: Board, ticks: int, rng: random.Random) -> int:
    """Run ``ticks`` gravity steps with a random move before each.

    Returns the number of ticks actually played; the session stops early on
    game over.
    """

    moves = (board.move_left, board.move_right, board.rotate, lambda: None)
    for played in range(ticks):
        if board.game_over:
            return played
        rng.choice(moves)()
        board.tick()
    return ticks


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=0, help="Random seed for the session")
    parser.add_argument("--ticks", type=int, default=500, help="Number of gravity ticks to play")
    parser.add_argument("--level", type=int, default=1, help="Score multiplier")
    parser.add_argument("--verbose", action="store_true", help="Log engine events")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    board = Board(level=args.level, seed=args.seed)
    played = play(board, args.ticks, random.Random(args.seed))
    LOGGER.info("Played %d ticks", played)
    for line in format_grid(render_grid(board)):
        print(line)
    print(f"Score: {board.score}{' (game over)' if board.game_over else ''}")


if __name__ == "__main__":
    main()
