"""Piece sources: where the session draws its next tetromino from."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Protocol

from .pieces import TetrominoType


class PieceSource(Protocol):
    def next_kind(self) -> TetrominoType: ...

    def reseed(self, seed: Optional[int]) -> None: ...


class RandomPieceSource:
    """Uniform choice among the seven kinds."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random(seed)

    def next_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def reseed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)


class SequencePieceSource:
    """Deals a fixed list of kinds in order, cycling when exhausted."""

    def __init__(self, kinds: Iterable[TetrominoType]) -> None:
        self.kinds: List[TetrominoType] = [TetrominoType(k) for k in kinds]
        if not self.kinds:
            raise ValueError("SequencePieceSource needs at least one piece kind")
        self._index = 0

    def next_kind(self) -> TetrominoType:
        kind = self.kinds[self._index % len(self.kinds)]
        self._index += 1
        return kind

    def reseed(self, seed: Optional[int]) -> None:
        self._index = 0
