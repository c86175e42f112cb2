from __future__ import annotations

from typing import Callable, List

import pytest

from falling_block_ai.game import (
    Board,
    EventType,
    GameEvent,
    GameSession,
    SequencePieceSource,
    TetrominoType,
)


@pytest.fixture
def make_session() -> Callable[..., GameSession]:
    """Session dealing the given kinds in order (cycling)."""

    def factory(*kinds: TetrominoType, **kwargs) -> GameSession:
        return GameSession(piece_source=SequencePieceSource(kinds or list(TetrominoType)), **kwargs)

    return factory


@pytest.fixture
def empty_board() -> Board:
    return Board.create_empty()


@pytest.fixture
def recorder() -> Callable[[GameSession], List[GameEvent]]:
    def attach(session: GameSession) -> List[GameEvent]:
        events: List[GameEvent] = []
        session.events.subscribe(events.append)
        return events

    return attach


def of_type(events: List[GameEvent], event_type: EventType) -> List[GameEvent]:
    return [e for e in events if e.type is event_type]
