from __future__ import annotations

from tetris_engine.board import Board
from tetris_engine.config import HEIGHT, WIDTH

from conftest import check_occupancy, make_piece

BOTTOM = HEIGHT - 1


def test_no_full_row_returns_none(board: Board) -> None:
    board.add_piece(make_piece([(x, BOTTOM) for x in range(WIDTH - 1)]))
    assert board.check_and_clear_rows() is None
    assert len(board.occupancy) == WIDTH - 1


def test_full_row_is_hidden_and_rows_above_drop() -> None:
    board = Board(seed=0)
    a = board.add_piece(make_piece([(x, BOTTOM) for x in range(5)] + [(0, BOTTOM - 1)]))
    b = board.add_piece(make_piece([(x, BOTTOM) for x in range(5, WIDTH)]))
    c = board.add_piece(make_piece([(3, BOTTOM - 3), (3, BOTTOM - 2)]))

    assert board.check_and_clear_rows() == BOTTOM

    assert all(not p.visible for p in board.pieces[b].parts)
    assert board.pieces[a].cells() == [(0, BOTTOM)]
    assert sum(not p.visible for p in board.pieces[a].parts) == 5
    assert board.pieces[c].cells() == [(3, BOTTOM - 2), (3, BOTTOM - 1)]
    assert board.occupancy == {
        (0, BOTTOM): a,
        (3, BOTTOM - 1): c,
        (3, BOTTOM - 2): c,
    }
    check_occupancy(board)
    assert board.check_and_clear_rows() is None


def test_cleared_parts_keep_their_piece(board: Board) -> None:
    piece_id = board.add_piece(make_piece([(x, BOTTOM) for x in range(WIDTH)]))
    board.check_and_clear_rows()
    assert piece_id in board.pieces
    assert board.pieces[piece_id].cells() == []
    assert len(board.pieces[piece_id].parts) == WIDTH


def test_lowest_full_row_is_cleared_first(board: Board) -> None:
    board.add_piece(make_piece([(x, BOTTOM - 2) for x in range(WIDTH)]))
    board.add_piece(make_piece([(x, BOTTOM) for x in range(WIDTH)]))
    board.add_piece(make_piece([(0, BOTTOM - 1)]))
    assert board.check_and_clear_rows() == BOTTOM
    # The upper full row dropped into the row below it.
    assert board.row_is_full(BOTTOM - 1)
    assert board.check_and_clear_rows() == BOTTOM - 1
    assert board.occupancy.keys() == {(0, BOTTOM)}
    check_occupancy(board)


def test_clear_full_rows_repeats_until_none_left(board: Board) -> None:
    for row in range(BOTTOM - 3, BOTTOM + 1):
        board.add_piece(make_piece([(x, row) for x in range(WIDTH)]))
    assert board.clear_full_rows() == [BOTTOM] * 4
    assert board.occupancy == {}
    check_occupancy(board)


def test_gaps_survive_the_collapse(board: Board) -> None:
    board.add_piece(make_piece([(x, BOTTOM) for x in range(WIDTH)]))
    board.add_piece(make_piece([(1, BOTTOM - 2), (8, BOTTOM - 4)]))
    board.check_and_clear_rows()
    assert set(board.occupancy) == {(1, BOTTOM - 1), (8, BOTTOM - 3)}
    check_occupancy(board)
