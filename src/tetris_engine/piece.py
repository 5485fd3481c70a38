"""Piece definitions: parts, spawn layouts and rotation tables.

A piece is an ordered list of :class:`Part` cells.  The order matters because
rotation is table driven: every (type, rotation) pair maps to one ``(dx, dy)``
delta per part, applied positionally.  The tables are hand written rather than
computed so that each piece turns about its own centre the way players expect,
and they are closed: four successive rotations bring every part back to where
it started.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Tuple

Cell = Tuple[int, int]
Layout = Tuple[Cell, ...]
# One ``(dx, dy)`` per part, indexed by rotation state.
RotationTable = Tuple[Layout, Layout, Layout, Layout]


class PieceType(str, Enum):
    """Enumeration of the seven piece shapes."""

    Q = "Q"
    Z = "Z"
    S = "S"
    T = "T"
    I = "I"
    L = "L"
    J = "J"


class Rotation(IntEnum):
    """Orientation of a piece, cycling R0 -> R1 -> R2 -> R3 -> R0."""

    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3

    def next(self) -> "Rotation":
        return Rotation((self + 1) % 4)


# Cells of each piece at ``R0`` relative to ``(start_x, 0)``.
SPAWN_LAYOUTS: Dict[PieceType, Layout] = {
    PieceType.Q: ((0, 0), (1, 0), (0, 1), (1, 1)),
    PieceType.Z: ((0, 0), (1, 0), (1, 1), (2, 1)),
    PieceType.S: ((1, 0), (2, 0), (0, 1), (1, 1)),
    PieceType.T: ((0, 1), (1, 1), (2, 1), (1, 0)),
    PieceType.I: ((0, 0), (1, 0), (2, 0), (3, 0)),
    PieceType.L: ((0, 1), (1, 1), (2, 1), (2, 0)),
    PieceType.J: ((0, 0), (0, 1), (1, 1), (2, 1)),
}

# ``ROTATION_DELTAS[type][rotation]`` moves a piece from ``rotation`` to
# ``rotation.next()``.  Q is absent: it never rotates.
ROTATION_DELTAS: Dict[PieceType, RotationTable] = {
    PieceType.Z: (
        ((2, 0), (1, 1), (0, 0), (-1, 1)),
        ((0, 2), (-1, 1), (0, 0), (-1, -1)),
        ((-2, 0), (-1, -1), (0, 0), (1, -1)),
        ((0, -2), (1, -1), (0, 0), (1, 1)),
    ),
    PieceType.S: (
        ((1, 1), (0, 2), (1, -1), (0, 0)),
        ((-1, 1), (-2, 0), (1, 1), (0, 0)),
        ((-1, -1), (0, -2), (-1, 1), (0, 0)),
        ((1, -1), (2, 0), (-1, -1), (0, 0)),
    ),
    PieceType.T: (
        ((1, -1), (0, 0), (-1, 1), (1, 1)),
        ((1, 1), (0, 0), (-1, -1), (-1, 1)),
        ((-1, 1), (0, 0), (1, -1), (-1, -1)),
        ((-1, -1), (0, 0), (1, 1), (1, -1)),
    ),
    PieceType.I: (
        ((2, -1), (1, 0), (0, 1), (-1, 2)),
        ((1, 2), (0, 1), (-1, 0), (-2, -1)),
        ((-2, 1), (-1, 0), (0, -1), (1, -2)),
        ((-1, -2), (0, -1), (1, 0), (2, 1)),
    ),
    PieceType.L: (
        ((1, -1), (0, 0), (-1, 1), (0, 2)),
        ((1, 1), (0, 0), (-1, -1), (-2, 0)),
        ((-1, 1), (0, 0), (1, -1), (0, -2)),
        ((-1, -1), (0, 0), (1, 1), (2, 0)),
    ),
    PieceType.J: (
        ((2, 0), (1, -1), (0, 0), (-1, 1)),
        ((0, 2), (1, 1), (0, 0), (-1, -1)),
        ((-2, 0), (-1, 1), (0, 0), (1, -1)),
        ((0, -2), (-1, -1), (0, 0), (1, 1)),
    ),
}


@dataclass
class Part:
    """A single cell belonging to a piece."""

    x: int
    y: int
    visible: bool = True

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)


@dataclass
class Piece:
    """A group of parts sharing a type, a colour and a rotation state."""

    piece_type: PieceType
    color: str
    parts: List[Part] = field(default_factory=list)
    rotation: Rotation = Rotation.R0

    @classmethod
    def spawn(cls, piece_type: PieceType, start_x: int, color: str) -> "Piece":
        """Return a new piece at ``R0`` with its layout anchored at ``start_x``."""

        parts = [Part(start_x + dx, dy) for dx, dy in SPAWN_LAYOUTS[piece_type]]
        return cls(piece_type=piece_type, color=color, parts=parts)

    def cells(self) -> List[Cell]:
        """Return the coordinates of the visible parts, in part order."""

        return [part.cell for part in self.parts if part.visible]

    def translated(self, dx: int, dy: int) -> List[Cell]:
        """Return the visible cells shifted by ``(dx, dy)`` without moving."""

        return [(x + dx, y + dy) for x, y in self.cells()]

    def rotated(self) -> List[Cell]:
        """Return the coordinates every part would have after one rotation.

        Unlike :meth:`cells` this covers all parts, visible or not, because the
        deltas are indexed by part position.
        """

        if self.piece_type is PieceType.Q:
            return [part.cell for part in self.parts]
        deltas = ROTATION_DELTAS[self.piece_type][self.rotation]
        return [(part.x + dx, part.y + dy) for part, (dx, dy) in zip(self.parts, deltas)]

    def move(self, dx: int, dy: int) -> None:
        for part in self.parts:
            part.x += dx
            part.y += dy

    def rotate(self) -> None:
        """Apply the rotation table unconditionally; Q is left untouched."""

        if self.piece_type is PieceType.Q:
            return
        for part, (x, y) in zip(self.parts, self.rotated()):
            part.x = x
            part.y = y
        self.rotation = self.rotation.next()

    def hide_row(self, row: int) -> None:
        """Mark every part in ``row`` as cleared."""

        for part in self.parts:
            if part.y == row:
                part.visible = False

    def part_at(self, x: int, y: int) -> Part:
        """Return the visible part at ``(x, y)``.

        Raises:
            LookupError: If no visible part of this piece sits there.
        """

        for part in self.parts:
            if part.visible and part.x == x and part.y == y:
                return part
        raise LookupError(f"No visible part at ({x}, {y})")
