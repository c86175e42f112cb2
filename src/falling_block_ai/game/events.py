from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List, Optional


logger = logging.getLogger(__name__)


class EventType(Enum):
    PIECE_MOVED = "piece_moved"
    PIECE_ROTATED = "piece_rotated"
    PIECE_LOCKED = "piece_locked"
    LINES_CLEARED = "lines_cleared"
    LEVEL_UP = "level_up"
    COMBO = "combo"
    GAME_OVER = "game_over"
    PAUSE_TOGGLED = "pause_toggled"


@dataclass
class GameEvent:
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous fan-out of game notifications to renderers, audio and tests.

    Listeners registered with `event_type=None` receive every event.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[Optional[EventType], List[Listener]] = defaultdict(list)

    def subscribe(self, listener: Listener, event_type: Optional[EventType] = None) -> None:
        self._listeners[event_type].append(listener)

    def unsubscribe(self, listener: Listener, event_type: Optional[EventType] = None) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        event = GameEvent(event_type, data)
        logger.debug("event %s %s", event_type.value, data)
        for listener in list(self._listeners.get(event_type, [])) + list(self._listeners.get(None, [])):
            listener(event)
        return event
