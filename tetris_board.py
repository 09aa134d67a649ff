
"""Board helpers: validity, placement, row clearing, drop distance"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tetris_piece import Piece, Position

Board = List[List[Optional[str]]]


@dataclass(frozen=True)
class ClearResult:
    board: Board
    cleared_count: int
    cleared_rows: Tuple[int, ...]


def create_board(cols: int, rows: int) -> Board:
    if cols <= 0 or rows <= 0:
        raise ValueError(f"board must be at least 1x1, got {cols}x{rows}")
    return [[None] * cols for _ in range(rows)]


def board_size(board: Board) -> Tuple[int, int]:
    """Return (cols, rows)."""
    if not board or not board[0]:
        raise ValueError("empty board")
    return len(board[0]), len(board)


def copy_board(board: Board) -> Board:
    return [row[:] for row in board]


def is_valid_placement(board: Board, piece: Piece, pos: Position) -> bool:
    cols, rows = board_size(board)
    for x, y in piece.cells():
        bx, by = pos.x + x, pos.y + y
        if bx < 0 or bx >= cols or by >= rows: return False
        if by >= 0 and board[by][bx] is not None: return False
    return True


def place(board: Board, piece: Piece, pos: Position) -> Board:
    """Copy of the board with the piece written in; cells above row 0 are dropped."""
    out = copy_board(board)
    for x, y in piece.cells():
        by = pos.y + y
        if by >= 0: out[by][pos.x + x] = piece.color
    return out


def scan_and_clear_full_rows(board: Board) -> ClearResult:
    cols, rows = board_size(board)
    cleared = tuple(y for y, row in enumerate(board) if all(c is not None for c in row))
    kept = [row[:] for y, row in enumerate(board) if y not in cleared]
    out = [[None] * cols for _ in cleared] + kept
    return ClearResult(out, len(cleared), cleared)


def drop_distance(board: Board, piece: Piece, pos: Position) -> int:
    """Rows the piece can fall from pos before it lands."""
    d = 0
    while is_valid_placement(board, piece, pos.moved(0, d + 1)):
        d += 1
    return d


def overlay(board: Board, piece: Optional[Piece], pos: Optional[Position]) -> Board:
    """Board copy with the falling piece drawn in, clipped to the visible grid."""
    if piece is None or pos is None:
        return copy_board(board)
    return place(board, piece, pos)
