"""Game module for the falling-block engine.

Exports the core game engine and supporting classes:
- Board: Cell grid, line clearing and surface queries
- Piece: Tetromino instance with clockwise rotation
- TetrominoType: Enum of the seven piece kinds (value = color id)
- collides / landing_row: Legality checks and drop simulation
- ScoringRules: Scoring, leveling and gravity configuration
- GameSession: State machine driving spawn, moves, locking and autoplay
"""

from .pieces import BOARD_HEIGHT, BOARD_WIDTH, BASE_SHAPES, COLORS, Piece, TetrominoType, rotate_cw
from .board import Board
from .collision import collides, landing_row, simulate_hard_drop
from .rules import ScoringRules
from .events import EventBus, EventType, GameEvent
from .randomizer import PieceSource, RandomPieceSource, SequencePieceSource
from .scheduler import Scheduler
from .core import Action, GameConfig, GameSession, GameState, Outcome

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "BASE_SHAPES",
    "COLORS",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "Board",
    "collides",
    "landing_row",
    "simulate_hard_drop",
    "ScoringRules",
    "EventBus",
    "EventType",
    "GameEvent",
    "PieceSource",
    "RandomPieceSource",
    "SequencePieceSource",
    "Scheduler",
    "Action",
    "GameConfig",
    "GameSession",
    "GameState",
    "Outcome",
]
