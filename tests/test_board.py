import numpy as np
import pytest

from falling_block_ai.game import Board, Piece, TetrominoType


def small_board() -> Board:
    return Board.from_array(
        [
            [0, 0, 0, 0],
            [1, 0, 0, 0],
            [1, 0, 1, 0],
            [0, 1, 1, 0],
        ]
    )


def test_create_empty(empty_board):
    assert empty_board.grid.shape == (20, 10)
    assert not empty_board.grid.any()


def test_is_row_full(empty_board):
    empty_board.grid[19, :] = 3
    empty_board.grid[18, :9] = 3
    assert empty_board.is_row_full(19)
    assert not empty_board.is_row_full(18)
    with pytest.raises(IndexError):
        empty_board.is_row_full(20)


def test_clear_non_contiguous_rows_keeps_order(empty_board):
    b = empty_board
    b.grid[19, :] = 1
    b.grid[18, 0] = 3
    b.grid[17, :] = 2
    b.grid[16, 5] = 4
    cleared = b.clear_full_rows()
    assert cleared == 2
    assert b.grid.shape == (20, 10)
    assert b.grid[19, 0] == 3 and np.count_nonzero(b.grid[19]) == 1
    assert b.grid[18, 5] == 4 and np.count_nonzero(b.grid[18]) == 1
    assert not b.grid[:18].any()
    assert b.count_full_rows() == 0


def test_clear_contiguous_rows(empty_board):
    empty_board.grid[16:, :] = 5
    empty_board.grid[15, 2] = 6
    assert empty_board.clear_full_rows() == 4
    assert empty_board.grid[19, 2] == 6
    assert np.count_nonzero(empty_board.grid) == 1


def test_clear_without_full_rows_is_noop(empty_board):
    empty_board.grid[19, :9] = 1
    before = empty_board.grid.copy()
    assert empty_board.clear_full_rows() == 0
    assert np.array_equal(empty_board.grid, before)


def test_clear_never_leaves_full_rows():
    rng = np.random.default_rng(0)
    for _ in range(50):
        grid = (rng.random((20, 10)) < 0.8).astype(np.int8) * rng.integers(1, 8, size=(20, 10), dtype=np.int8)
        grid[rng.random(20) < 0.4] = 7
        board = Board.from_array(grid)
        full = board.count_full_rows()
        assert board.clear_full_rows() == full
        assert board.grid.shape == (20, 10)
        assert board.count_full_rows() == 0
        assert not board.grid[:full].any()


def test_lock_writes_color_and_skips_rows_above_board(empty_board):
    piece = Piece.spawn(TetrominoType.O).at(0, -1)
    empty_board.lock(piece)
    assert empty_board.grid[0, 0] == 4 and empty_board.grid[0, 1] == 4
    assert np.count_nonzero(empty_board.grid) == 2


def test_surface_queries():
    b = small_board()
    assert list(b.column_heights()) == [3, 1, 2, 0]
    assert b.column_height(0) == 3
    assert b.total_height() == 6
    assert b.max_height() == 3
    assert b.count_holes() == 1
    assert b.bumpiness() == 5
    assert b.row_transitions() == 6
    assert b.col_transitions() == 4
    assert b.well_depth_sum() == 1
    with pytest.raises(IndexError):
        b.column_height(4)


def test_copy_and_snapshot_are_independent(empty_board):
    clone = empty_board.copy()
    clone.grid[0, 0] = 1
    assert empty_board.grid[0, 0] == 0
    snap = empty_board.cells()
    with pytest.raises(ValueError):
        snap[0, 0] = 1
