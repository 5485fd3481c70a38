"""Utility helpers for renderers of the engine state."""

from __future__ import annotations

from typing import List

from .board import PIECE_VALUES, Board, Grid, create_empty_grid


def render_grid(board: Board) -> Grid:
    """Return a grid with every visible part stamped with its piece value.

    This is a convenience for renderers that want a single 2D array to draw.
    The active piece is included; rows are indexed by ``y`` and columns by
    ``x``.
    """

    grid = create_empty_grid()
    for piece, part in board.visible_parts():
        grid[part.y, part.x] = PIECE_VALUES[piece.piece_type]
    return grid


def format_grid(grid: Grid) -> List[str]:
    """Return one text line per row, ``#`` for occupied and ``.`` for empty."""

    return ["".join("#" if cell else "." for cell in row) for row in grid]
