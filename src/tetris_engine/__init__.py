"""Rules engine for a falling-block puzzle game."""

from .bag import Bag
from .board import Board, RowClearAnimation, PIECE_VALUES
from .piece import Part, Piece, PieceType, Rotation
from .driver import Action, FrameDriver, GravityTimer, InputState, Key
from .utils import format_grid, render_grid

__all__ = [
    "Action",
    "Bag",
    "Board",
    "FrameDriver",
    "GravityTimer",
    "InputState",
    "Key",
    "PIECE_VALUES",
    "Part",
    "Piece",
    "PieceType",
    "Rotation",
    "RowClearAnimation",
    "format_grid",
    "render_grid",
]
