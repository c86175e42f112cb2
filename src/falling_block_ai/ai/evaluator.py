"""Heuristic board evaluation.

Scores a hypothetical board (a candidate placement already locked in, full
rows not yet cleared) as a weighted sum of surface features. Higher is better.
Completed rows dominate every other term; height, holes, bumpiness and
transitions are penalized; wells are rewarded since an I-piece can use them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from ..game.board import Board


@dataclass
class EvaluatorWeights:
    lines: float = 10000.0
    total_height: float = 5.0
    danger: float = 20.0
    danger_height: int = 15
    holes: float = 100.0
    bumpiness: float = 10.0
    wells: float = 20.0
    row_transitions: float = 3.0
    col_transitions: float = 3.0


class HeuristicEvaluator:
    def __init__(self, weights: Optional[EvaluatorWeights] = None) -> None:
        self.weights = weights or EvaluatorWeights()

    def features(self, board: "Board") -> Dict[str, int]:
        return {
            "lines": board.count_full_rows(),
            "total_height": board.total_height(),
            "holes": board.count_holes(),
            "bumpiness": board.bumpiness(),
            "wells": board.well_depth_sum(),
            "row_transitions": board.row_transitions(),
            "col_transitions": board.col_transitions(),
        }

    def evaluate(self, board: "Board") -> float:
        w = self.weights
        f = self.features(board)
        score = 0.0
        score += w.lines * f["lines"]
        score -= w.total_height * f["total_height"]
        score -= w.danger * max(0, f["total_height"] - w.danger_height)
        score -= w.holes * f["holes"]
        score -= w.bumpiness * f["bumpiness"]
        score += w.wells * f["wells"]
        score -= w.row_transitions * f["row_transitions"]
        score -= w.col_transitions * f["col_transitions"]
        return score
