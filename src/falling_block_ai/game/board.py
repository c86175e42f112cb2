from __future__ import annotations

import numpy as np

from .pieces import BOARD_HEIGHT, BOARD_WIDTH, Piece


EMPTY = 0


class Board:
    """Fixed-size cell grid holding locked piece colors.

    Row 0 is the top of the board. Cells hold 0 for empty and the color id
    (1..7) of the piece that was locked there. Dimensions never change; the
    contents only change through `lock` and `clear_full_rows`.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @classmethod
    def create_empty(cls, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> "Board":
        return cls(width, height)

    @classmethod
    def from_array(cls, grid: np.ndarray) -> "Board":
        grid = np.asarray(grid, dtype=np.int8)
        board = cls(grid.shape[1], grid.shape[0])
        board.grid[:, :] = grid
        return board

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def copy(self) -> "Board":
        board = Board(self.width, self.height)
        board.grid = self.grid.copy()
        return board

    def cells(self) -> np.ndarray:
        """Read-only snapshot of the grid."""
        snapshot = self.grid.copy()
        snapshot.flags.writeable = False
        return snapshot

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_row_full(self, row: int) -> bool:
        if not 0 <= row < self.height:
            raise IndexError(f"row {row} outside board of height {self.height}")
        return bool(np.all(self.grid[row] != EMPTY))

    def count_full_rows(self) -> int:
        return int(np.count_nonzero(np.all(self.grid != EMPTY, axis=1)))

    def lock(self, piece: Piece) -> None:
        for x, y in piece.cells():
            # Cells still above the visible board are dropped
            if y >= 0:
                self.grid[y, x] = piece.color

    def clear_full_rows(self) -> int:
        """Remove every full row, shifting the rows above down. Returns the count."""
        full_rows = np.where(np.all(self.grid != EMPTY, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return num

    # Queries used by the heuristic evaluator

    def column_heights(self) -> np.ndarray:
        occ = self.grid != EMPTY
        first_occ = np.where(occ.any(axis=0), np.argmax(occ, axis=0), self.height)
        return (self.height - first_occ).astype(np.int64)

    def column_height(self, x: int) -> int:
        if not 0 <= x < self.width:
            raise IndexError(f"column {x} outside board of width {self.width}")
        return int(self.column_heights()[x])

    def max_height(self) -> int:
        return int(self.column_heights().max())

    def total_height(self) -> int:
        return int(self.column_heights().sum())

    def count_holes(self) -> int:
        occ = self.grid != EMPTY
        # A cell is covered once any cell above it in the column is occupied
        covered = np.cumsum(occ, axis=0) > 0
        return int(np.count_nonzero(covered & ~occ))

    def bumpiness(self) -> int:
        return int(np.abs(np.diff(self.column_heights())).sum())

    def row_transitions(self) -> int:
        occ = self.grid != EMPTY
        return int(np.count_nonzero(occ[:, :-1] != occ[:, 1:]))

    def col_transitions(self) -> int:
        occ = self.grid != EMPTY
        return int(np.count_nonzero(occ[:-1, :] != occ[1:, :]))

    def well_depth_sum(self) -> int:
        """Sum of depths of interior columns lower than both neighbors."""
        heights = self.column_heights()
        if heights.size < 3:
            return 0
        inner = heights[1:-1]
        rim = np.minimum(heights[:-2], heights[2:])
        depth = rim - inner
        return int(depth[depth > 0].sum())

    def __str__(self) -> str:
        return "\n".join("".join("█" if cell else "·" for cell in row) for row in self.grid)
