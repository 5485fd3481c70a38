"""Board engine: occupancy, gravity, movement, rotation, row clears and score."""

from __future__ import annotations

import itertools
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np
from numpy.typing import NDArray

from .bag import Bag
from .config import (
    COLORS,
    HEIGHT,
    LINE_SCORES,
    NEXT_QUEUE_SIZE,
    ROW_CLEAR_ANIMATION_FRAMES,
    SPAWN_COLUMN,
    WIDTH,
)
from .piece import Cell, Part, Piece, PieceType


LOGGER = logging.getLogger(__name__)

PieceId = int
Grid = NDArray[np.uint8]

# Mapping from ``PieceType`` to the integer used in rendered grids.  ``0``
# represents an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(PieceType)}

LEFT = (-1, 0)
RIGHT = (1, 0)
DOWN = (0, 1)


def create_empty_grid() -> Grid:
    """Return a new empty grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


@dataclass
class RowClearAnimation:
    """Rows that were just cleared and how many frames they keep flashing.

    This is display state only.  The renderer calls :meth:`advance` once per
    frame; the engine never waits on it.
    """

    remaining_ticks: int = 0
    rows: Set[int] = field(default_factory=set)

    @property
    def active(self) -> bool:
        return self.remaining_ticks > 0

    def start(self, rows: Iterable[int], frames: int = ROW_CLEAR_ANIMATION_FRAMES) -> None:
        self.rows = set(rows)
        self.remaining_ticks = frames

    def advance(self) -> None:
        if self.remaining_ticks > 0:
            self.remaining_ticks -= 1
        if self.remaining_ticks == 0:
            self.rows.clear()


class Board:
    """The rules engine of a single game session.

    Pieces live in an arena keyed by identifiers that are handed out once and
    never reused, and ``occupancy`` maps each occupied cell to the identifier
    of its owner.  Every visible part of every piece has exactly one entry in
    ``occupancy`` and every entry points at such a part.  Mutators decide
    legality first, then lift the piece's old cells, move it and place the new
    cells, so a rejected move leaves nothing behind.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, *, level: int = 1, seed: Optional[int] = None) -> None:
        self._level = 1
        self.level = level
        self.reset(seed=seed)

    # Session -----------------------------------------------------------
    def reset(self, seed: Optional[int] = None) -> None:
        """Start a fresh session, keeping the externally supplied level."""

        self._rng = random.Random(seed)
        self._types: Bag[PieceType] = Bag(list(PieceType), self._rng)
        self._colors: Bag[str] = Bag(COLORS, self._rng)
        self._ids = itertools.count(1)
        self.occupancy: Dict[Cell, PieceId] = {}
        self.pieces: Dict[PieceId, Piece] = {}
        self.active_piece: Optional[PieceId] = None
        self.next_pieces: Deque[Piece] = deque(
            self._draw_piece() for _ in range(NEXT_QUEUE_SIZE)
        )
        self.score = 0
        self.row_clear_animation = RowClearAnimation()
        self.game_over = False

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"Level must be at least 1, got {value}")
        self._level = value

    @property
    def active(self) -> Optional[Piece]:
        """Return the active :class:`Piece`, if any."""

        if self.active_piece is None:
            return None
        return self.pieces[self.active_piece]

    # Queries -----------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def owner(self, x: int, y: int) -> Optional[PieceId]:
        """Return the identifier of the piece occupying ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not self.in_bounds(x, y):
            raise IndexError("Cell out of bounds")
        return self.occupancy.get((x, y))

    def visible_parts(self) -> Iterator[Tuple[Piece, Part]]:
        """Yield ``(piece, part)`` for every part a renderer should paint."""

        for piece in self.pieces.values():
            for part in piece.parts:
                if part.visible:
                    yield piece, part

    def row_is_full(self, row: int) -> bool:
        return all((x, row) in self.occupancy for x in range(self.width))

    def _fits(self, cells: Iterable[Cell], ignore: Optional[PieceId] = None) -> bool:
        """Return ``True`` if every cell is on the board and free.

        Cells owned by ``ignore`` count as free so a piece never blocks
        itself.
        """

        for x, y in cells:
            if not self.in_bounds(x, y):
                return False
            occupant = self.occupancy.get((x, y))
            if occupant is not None and occupant != ignore:
                return False
        return True

    # Occupancy bookkeeping ---------------------------------------------
    def _lift(self, piece_id: PieceId) -> None:
        for cell in self.pieces[piece_id].cells():
            del self.occupancy[cell]

    def _place(self, piece_id: PieceId) -> None:
        for cell in self.pieces[piece_id].cells():
            self.occupancy[cell] = piece_id

    def add_piece(self, piece: Piece, active: bool = False) -> PieceId:
        """Insert ``piece`` into the arena and return its identifier.

        Raises:
            ValueError: If a visible part is off the board, on an occupied
                cell or on the same cell as another of its parts, or if
                ``active`` is requested while another piece is active.
        """

        cells = piece.cells()
        if len(set(cells)) != len(cells) or not self._fits(cells):
            raise ValueError(f"Cannot place {piece.piece_type.value} piece at {cells}")
        if active and self.active_piece is not None:
            raise ValueError(f"Piece {self.active_piece} is still active")
        piece_id = next(self._ids)
        self.pieces[piece_id] = piece
        self._place(piece_id)
        if active:
            self.active_piece = piece_id
        LOGGER.debug("Added %s piece %d at %s", piece.piece_type.value, piece_id, piece.cells())
        return piece_id

    def spawn(self, piece_type: PieceType, start_x: int, color: str) -> PieceId:
        """Spawn a new active piece of ``piece_type`` anchored at ``start_x``."""

        return self.add_piece(Piece.spawn(piece_type, start_x, color), active=True)

    def _draw_piece(self) -> Piece:
        return Piece.spawn(self._types.draw(), SPAWN_COLUMN, self._colors.draw())

    def _spawn_next(self) -> None:
        piece = self.next_pieces.popleft()
        self.next_pieces.append(self._draw_piece())
        if not self._fits(piece.cells()):
            self.game_over = True
            LOGGER.info("Game over: no room to spawn %s. Score: %d", piece.piece_type.value, self.score)
            return
        self.add_piece(piece, active=True)

    # Movement ----------------------------------------------------------
    def _move(self, dx: int, dy: int) -> bool:
        piece_id = self.active_piece
        if piece_id is None:
            return False
        piece = self.pieces[piece_id]
        if not self._fits(piece.translated(dx, dy), ignore=piece_id):
            if dy:
                self.active_piece = None
                LOGGER.debug("Piece %d landed at %s", piece_id, piece.cells())
            return False
        self._lift(piece_id)
        piece.move(dx, dy)
        self._place(piece_id)
        return True

    def move_left(self) -> bool:
        return self._move(*LEFT)

    def move_right(self) -> bool:
        return self._move(*RIGHT)

    def move_down(self) -> bool:
        """Move the active piece down one row, landing it if it cannot move."""

        return self._move(*DOWN)

    def rotate(self) -> bool:
        """Rotate the active piece, leaving it unchanged if the result collides.

        The rotated cells must be on the board and must not overlap another
        piece.  Q pieces never rotate.
        """

        piece_id = self.active_piece
        if piece_id is None:
            return False
        piece = self.pieces[piece_id]
        if piece.piece_type is PieceType.Q:
            return False
        if not self._fits(piece.rotated(), ignore=piece_id):
            return False
        self._lift(piece_id)
        piece.rotate()
        self._place(piece_id)
        return True

    # Row clearing ------------------------------------------------------
    def check_and_clear_rows(self) -> Optional[int]:
        """Clear the lowest full row and return its index, or ``None``.

        Parts in the cleared row become invisible but stay attached to their
        pieces.  Every occupied cell above the row then drops by one, moving
        the occupancy entry and the owning part together.  Rows are walked
        bottom-up so the destination cell is always already vacated.
        """

        for row in range(self.height - 1, -1, -1):
            if self.row_is_full(row):
                self._clear_row(row)
                return row
        return None

    def _clear_row(self, row: int) -> None:
        owners = {self.occupancy.pop((x, row)) for x in range(self.width)}
        for piece_id in owners:
            self.pieces[piece_id].hide_row(row)
        for y in range(row - 1, -1, -1):
            for x in range(self.width):
                piece_id = self.occupancy.pop((x, y), None)
                if piece_id is None:
                    continue
                self.pieces[piece_id].part_at(x, y).y = y + 1
                self.occupancy[(x, y + 1)] = piece_id

    def clear_full_rows(self) -> List[int]:
        """Clear rows until none is full and return the cleared indices."""

        cleared: List[int] = []
        row = self.check_and_clear_rows()
        while row is not None:
            cleared.append(row)
            row = self.check_and_clear_rows()
        return cleared

    # Gravity -----------------------------------------------------------
    def tick(self) -> None:
        """Advance the game by one gravity step.

        With an active piece this is a plain :meth:`move_down`.  Otherwise any
        full rows are cleared and scored as one batch and the next queued piece
        is spawned.
        """

        if self.game_over:
            return
        if self.active_piece is not None:
            self.move_down()
            return

        cleared = self.clear_full_rows()
        if cleared:
            gained = LINE_SCORES.get(len(cleared), 0) * self.level
            self.score += gained
            # Each clear collapses the rows above it, so the n-th index
            # returned sits n rows below where that row started.
            self.row_clear_animation.start(row - n for n, row in enumerate(cleared))
            LOGGER.info("Cleared %d row(s) for %d points. Score: %d", len(cleared), gained, self.score)
        self._spawn_next()
