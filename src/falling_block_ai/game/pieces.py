from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

import numpy as np

BOARD_WIDTH = 10
BOARD_HEIGHT = 20

class TetrominoType(IntEnum):
    """Piece kinds; the value doubles as the color id written into the board."""

    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7

Shape = np.ndarray

def _freeze(shape: Shape) -> Shape:
    shape = np.array(shape, dtype=np.int8)
    shape.flags.writeable = False
    return shape

def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise: new[x][h-1-y] = old[y][x]."""
    return _freeze(np.rot90(shape, 1, axes=(1, 0)))

_MASKS = {
    TetrominoType.I: [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
    TetrominoType.J: [[1, 0, 0], [1, 1, 1], [0, 0, 0]],
    TetrominoType.L: [[0, 0, 1], [1, 1, 1], [0, 0, 0]],
    TetrominoType.O: [[1, 1], [1, 1]],
    TetrominoType.S: [[0, 1, 1], [1, 1, 0], [0, 0, 0]],
    TetrominoType.T: [[0, 1, 0], [1, 1, 1], [0, 0, 0]],
    TetrominoType.Z: [[1, 1, 0], [0, 1, 1], [0, 0, 0]],
}

# RGB per color id; index 0 is the empty cell
COLORS: Tuple[Tuple[int, int, int], ...] = (
    (30, 30, 36),
    (0, 240, 240),  # I
    (0, 0, 240),    # J
    (240, 160, 0),  # L
    (240, 240, 0),  # O
    (0, 240, 0),    # S
    (160, 0, 240),  # T
    (240, 0, 0),    # Z
)

# Each nonzero cell carries the piece's color id
BASE_SHAPES = {kind: _freeze(np.array(mask) * int(kind)) for kind, mask in _MASKS.items()}

@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0
    serial: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, width: int = BOARD_WIDTH, row: int = 0, serial: int = 0) -> "Piece":
        shape = BASE_SHAPES[kind]
        w = shape.shape[1]
        return cls(kind=kind, shape=shape, x=(width - w) // 2, y=row, serial=serial)

    @property
    def color(self) -> int:
        return int(self.kind)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    @property
    def fingerprint(self) -> Tuple[int, int, int]:
        """Identity of the controlled piece; stable across moves and rotations."""
        return (self.serial, self.color, int(self.kind))

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

    def with_shape(self, shape: Shape) -> "Piece":
        return replace(self, shape=_freeze(shape))

    def at(self, x: int, y: int) -> "Piece":
        return replace(self, x=x, y=y)

    def same_shape(self, other: "Piece") -> bool:
        return np.array_equal(self.shape, other.shape)

    def cells(self) -> List[Tuple[int, int]]:
        """Absolute (x, y) board coordinates of the occupied cells."""
        ys, xs = np.nonzero(self.shape)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]
