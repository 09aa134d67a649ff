
"""Piece catalog, rotation and wall kicks"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

Shape = Tuple[Tuple[int, ...], ...]


class PieceKind(str, Enum):
    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


SHAPES: Dict[PieceKind, Shape] = {
    PieceKind.I: ((1,1,1,1),),
    PieceKind.O: ((1,1),(1,1)),
    PieceKind.T: ((0,1,0),(1,1,1)),
    PieceKind.S: ((0,1,1),(1,1,0)),
    PieceKind.Z: ((1,1,0),(0,1,1)),
    PieceKind.J: ((1,0,0),(1,1,1)),
    PieceKind.L: ((0,0,1),(1,1,1)),
}

COLORS: Dict[PieceKind, str] = {
    PieceKind.I: "cyan",
    PieceKind.O: "yellow",
    PieceKind.T: "purple",
    PieceKind.S: "green",
    PieceKind.Z: "red",
    PieceKind.J: "blue",
    PieceKind.L: "orange",
}

# Tried in order; centered first, then horizontal, then upward kicks.
WALL_KICKS: Tuple[Tuple[int, int], ...] = (
    (0, 0), (-1, 0), (1, 0), (0, -1), (-1, -1), (1, -1),
)


def shape_of(kind: PieceKind) -> Shape:
    return SHAPES[kind]


def color_of(kind: PieceKind) -> str:
    return COLORS[kind]


def rotate_cw(m: Shape) -> Shape:
    return tuple(tuple(r) for r in zip(*m[::-1]))


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    shape: Shape
    color: str

    @staticmethod
    def spawn(kind: PieceKind) -> "Piece":
        return Piece(kind, shape_of(kind), color_of(kind))

    @property
    def width(self) -> int:
        return len(self.shape[0])

    @property
    def height(self) -> int:
        return len(self.shape)

    def cells(self) -> List[Tuple[int, int]]:
        """(col, row) offsets of the occupied cells inside the bounding box."""
        return [(x, y) for y, row in enumerate(self.shape) for x, v in enumerate(row) if v]


@dataclass(frozen=True)
class RotationResult:
    accepted: bool
    piece: Piece
    position: Position


def spawn_position(piece: Piece, cols: int) -> Position:
    return Position((cols - piece.width) // 2, 0)


def rotate(piece: Piece) -> Piece:
    return Piece(piece.kind, rotate_cw(piece.shape), piece.color)


def resolve_rotation(board, piece: Piece, position: Position) -> RotationResult:
    rotated = rotate(piece)
    from tetris_board import is_valid_placement
    for dx, dy in WALL_KICKS:
        test = position.moved(dx, dy)
        if is_valid_placement(board, rotated, test):
            return RotationResult(True, rotated, test)
    return RotationResult(False, piece, position)
