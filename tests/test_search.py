import numpy as np
import pytest

from falling_block_ai.ai import HeuristicEvaluator, enumerate_rotations, find_best_placement, score_placement
from falling_block_ai.game import BASE_SHAPES, Board, Piece, TetrominoType as T


@pytest.mark.parametrize("kind,count", [(T.O, 1), (T.I, 4), (T.S, 4), (T.Z, 4), (T.T, 4), (T.J, 4), (T.L, 4)])
def test_rotation_states(kind, count):
    rotations = enumerate_rotations(BASE_SHAPES[kind])
    assert len(rotations) == count
    assert np.array_equal(rotations[0], BASE_SHAPES[kind])


def test_flat_i_on_empty_board(empty_board):
    best = find_best_placement(empty_board, Piece.spawn(T.I))
    assert (best.rotations, best.column, best.row) == (0, 0, 18)
    assert best.score == pytest.approx(-45)


def test_flush_vertical_i_beats_placements_with_holes(empty_board):
    evaluator = HeuristicEvaluator()
    vertical = Piece.spawn(T.I).rotated().at(-2, 0)
    flush = score_placement(empty_board, vertical, evaluator)
    assert flush == pytest.approx(-75)

    bridged = Board.create_empty()
    bridged.grid[18, 0:4] = int(T.I)
    assert bridged.count_holes() == 4
    assert flush > evaluator.evaluate(bridged)

    best = find_best_placement(empty_board, Piece.spawn(T.I), evaluator)
    landed = empty_board.copy()
    landed.lock(Piece.spawn(T.I).with_shape(best.shape).at(best.column, best.row))
    assert landed.count_holes() == 0


def test_line_clear_wins(empty_board):
    empty_board.grid[19, 1:] = int(T.Z)
    empty_board.grid[18, 3:] = int(T.Z)
    best = find_best_placement(empty_board, Piece.spawn(T.I))
    assert (best.rotations, best.column) == (1, -2)
    assert best.row == 16
    assert best.score > 5000


def test_placements_blocked_at_row_zero_are_skipped(empty_board):
    empty_board.grid[:, 0] = int(T.J)
    best = find_best_placement(empty_board, Piece.spawn(T.O))
    assert best.rotations == 0
    assert best.column >= 1


def test_no_placement_on_full_board(empty_board):
    empty_board.grid[:, :] = int(T.J)
    assert find_best_placement(empty_board, Piece.spawn(T.T)) is None


def test_search_is_deterministic_and_pure():
    rng = np.random.default_rng(4)
    grid = np.zeros((20, 10), dtype=np.int8)
    heights = rng.integers(0, 8, size=10)
    for x, h in enumerate(heights):
        grid[20 - h:, x] = 3
    grid[19, 0] = 0
    board = Board.from_array(grid)
    before = board.grid.copy()
    piece = Piece.spawn(T.L)
    first = find_best_placement(board, piece)
    second = find_best_placement(board, piece)
    assert (first.rotations, first.column, first.score) == (second.rotations, second.column, second.score)
    assert np.array_equal(board.grid, before)
