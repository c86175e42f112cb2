"""Pure legality checks and landing simulation.

`collides` is the only legality test in the engine: moves, rotations, drops
and spawn all go through it.
"""

from __future__ import annotations

from .board import EMPTY, Board
from .pieces import Piece


def collides(board: Board, piece: Piece) -> bool:
    for x, y in piece.cells():
        if x < 0 or x >= board.width or y >= board.height:
            return True
        # Rows above the board are always free
        if y >= 0 and board.grid[y, x] != EMPTY:
            return True
    return False


def landing_row(board: Board, piece: Piece) -> int:
    """Lowest row the piece reaches by falling straight down from its current row."""
    y = piece.y
    while not collides(board, piece.at(piece.x, y + 1)):
        y += 1
    return y


def simulate_hard_drop(board: Board, piece: Piece) -> Piece:
    return piece.at(piece.x, landing_row(board, piece))
