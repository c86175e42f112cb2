"""Autoplay: heuristic board evaluation, placement search and move execution."""

from .evaluator import EvaluatorWeights, HeuristicEvaluator
from .search import Placement, enumerate_rotations, find_best_placement, score_placement
from .autoplay import AutoPlayer

__all__ = [
    "EvaluatorWeights",
    "HeuristicEvaluator",
    "Placement",
    "enumerate_rotations",
    "find_best_placement",
    "score_placement",
    "AutoPlayer",
]
