"""Greedy placement search over rotation states and columns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..game.board import Board
from ..game.collision import collides, simulate_hard_drop
from ..game.pieces import Piece, Shape, rotate_cw
from .evaluator import HeuristicEvaluator

# Columns of slack on each side for shapes whose matrix has empty edge columns
COLUMN_SLACK = 2


@dataclass
class Placement:
    rotations: int  # clockwise turns from the piece's current orientation
    column: int  # anchor column of the shape matrix
    row: int  # anchor row where the piece lands
    score: float
    shape: Shape


def enumerate_rotations(shape: Shape) -> List[Shape]:
    """Distinct clockwise rotation states, starting with `shape` itself."""
    rotations: List[Shape] = [shape]
    current = shape
    for _ in range(3):
        current = rotate_cw(current)
        if any(np.array_equal(current, seen) for seen in rotations):
            break
        rotations.append(current)
    return rotations


def evaluate_landed(board: Board, landed: Piece, evaluator: HeuristicEvaluator) -> float:
    trial = board.copy()
    trial.lock(landed)
    return evaluator.evaluate(trial)


def score_placement(board: Board, piece: Piece, evaluator: HeuristicEvaluator) -> float:
    """Drop `piece` on a copy of `board`, lock it and evaluate the result."""
    return evaluate_landed(board, simulate_hard_drop(board, piece), evaluator)


def find_best_placement(
    board: Board, piece: Piece, evaluator: Optional[HeuristicEvaluator] = None
) -> Optional[Placement]:
    """Highest-scoring (rotation, column) for `piece`; ties keep the first found.

    Candidates are visited rotations ascending, then columns ascending. A
    candidate that already collides at row 0 is skipped.
    """
    evaluator = evaluator or HeuristicEvaluator()
    best: Optional[Placement] = None
    for r, shape in enumerate(enumerate_rotations(piece.shape)):
        width = shape.shape[1]
        for x in range(-COLUMN_SLACK, board.width - width + COLUMN_SLACK + 1):
            candidate = piece.with_shape(shape).at(x, 0)
            if collides(board, candidate):
                continue
            landed = simulate_hard_drop(board, candidate)
            score = evaluate_landed(board, landed, evaluator)
            if best is None or score > best.score:
                best = Placement(rotations=r, column=x, row=landed.y, score=score, shape=shape)
    return best
