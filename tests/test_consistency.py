from __future__ import annotations

import random

import pytest

from tetris_engine.board import Board
from tetris_engine.piece import PieceType

from conftest import check_occupancy


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_random_play_keeps_occupancy_consistent(seed: int) -> None:
    rng = random.Random(seed)
    board = Board(seed=seed)
    operations = [
        board.tick,
        board.tick,
        board.move_left,
        board.move_right,
        board.move_down,
        board.rotate,
    ]
    for _ in range(3000):
        rng.choice(operations)()
        check_occupancy(board)
        if board.game_over:
            board.reset(seed=rng.randrange(1000))
    assert board.score >= 0


def test_scripted_stack_clears_and_stays_consistent() -> None:
    # Two flat I pieces and a Q complete the bottom row.
    board = Board(seed=0)
    for start in (0, 4):
        board.spawn(PieceType.I, start, "#00ffff")
        while board.active_piece is not None:
            board.move_down()
    board.spawn(PieceType.Q, 8, "#ffff0e")
    while board.active_piece is not None:
        board.move_down()
    check_occupancy(board)
    board.tick()
    assert board.score == 100
    check_occupancy(board)
