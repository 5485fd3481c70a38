from __future__ import annotations

from typing import Iterable, Tuple

import pytest

from tetris_engine.board import Board
from tetris_engine.piece import Part, Piece, PieceType


def check_occupancy(board: Board) -> None:
    """Assert the occupancy map and the visible parts mirror each other."""

    visible = 0
    for piece_id, piece in board.pieces.items():
        for part in piece.parts:
            if not part.visible:
                continue
            visible += 1
            assert 0 <= part.x < board.width, part
            assert 0 <= part.y < board.height, part
            assert board.occupancy.get((part.x, part.y)) == piece_id, part
    assert len(board.occupancy) == visible


def make_piece(cells: Iterable[Tuple[int, int]], color: str = "#444444") -> Piece:
    """Build a free-form piece; the engine accepts any number of parts."""

    return Piece(PieceType.Q, color, [Part(x, y) for x, y in cells])


@pytest.fixture
def board() -> Board:
    return Board(seed=0)
