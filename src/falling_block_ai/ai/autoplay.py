from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple

from ..game.core import Action, Outcome
from .evaluator import HeuristicEvaluator
from .search import Placement, find_best_placement

if TYPE_CHECKING:
    from ..game.core import GameSession


logger = logging.getLogger(__name__)


class AutoPlayer:
    """Drives a session one command per tick toward the best placement.

    The target is searched once per piece, when the piece fingerprint
    changes. Each tick then issues a single rotation, a single one-column
    move, or the final hard drop, through the same commands a human uses.

    A one-column move that the board rejects is not retried: the piece is
    hard dropped in its current column on that same tick.
    """

    def __init__(self, session: "GameSession", evaluator: Optional[HeuristicEvaluator] = None) -> None:
        self.session = session
        self.evaluator = evaluator or HeuristicEvaluator()
        self.target: Optional[Placement] = None
        self.rotations_left = 0
        self._fingerprint: Optional[Tuple[int, int, int]] = None

    def forget(self) -> None:
        self.target = None
        self.rotations_left = 0
        self._fingerprint = None

    def plan(self) -> Optional[Placement]:
        piece = self.session.current_piece
        if piece is None:
            return None
        self.target = find_best_placement(self.session.board, piece, self.evaluator)
        self.rotations_left = self.target.rotations if self.target is not None else 0
        self._fingerprint = piece.fingerprint
        if self.target is not None:
            logger.debug(
                "target for %s: rotations=%d column=%d score=%.1f",
                piece.kind.name, self.target.rotations, self.target.column, self.target.score,
            )
        return self.target

    def tick(self) -> Action:
        session = self.session
        piece = session.current_piece
        if not session.is_running or piece is None:
            return Action.NONE
        if piece.fingerprint != self._fingerprint:
            self.plan()
        if self.target is None:
            return self._drop()
        if self.rotations_left > 0:
            self.rotations_left -= 1
            session.rotate()
            return Action.ROTATE
        piece = session.current_piece
        if piece.x != self.target.column:
            direction = 1 if piece.x < self.target.column else -1
            if session.move(direction) is Outcome.ACCEPTED:
                return Action.RIGHT if direction > 0 else Action.LEFT
            # Blocked: drop in place
        return self._drop()

    def _drop(self) -> Action:
        self.session.hard_drop()
        self.forget()
        return Action.HARD_DROP
