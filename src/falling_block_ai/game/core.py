from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import numpy as np

from .board import Board
from .collision import collides
from .events import EventBus, EventType
from .pieces import BOARD_HEIGHT, BOARD_WIDTH, Piece
from .randomizer import PieceSource, RandomPieceSource
from .rules import ScoringRules
from .scheduler import Scheduler, Timer

if TYPE_CHECKING:
    from ..ai.evaluator import HeuristicEvaluator


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class Outcome(IntEnum):
    REJECTED = 0
    ACCEPTED = 1
    LOCKED = 2


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    spawn_y: int = 0
    autoplay_period_ms: int = 200
    autoplay_speedup: int = 10
    autoplay_min_drop_interval_ms: int = 50


class GameSession:
    """One falling-block game: board, pieces, scoring and the autoplay hook.

    Commands (`move`, `rotate`, `soft_drop`, ...) are synchronous and atomic.
    Time only passes through `advance`, which fires the autoplay timer and
    applies gravity once the drop interval has elapsed.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        piece_source: Optional[PieceSource] = None,
        evaluator: Optional["HeuristicEvaluator"] = None,
    ) -> None:
        from ..ai.autoplay import AutoPlayer

        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.piece_source = piece_source or RandomPieceSource(self.config.random_seed)
        self.events = EventBus()
        self.scheduler = Scheduler()
        self.board = Board.create_empty(BOARD_WIDTH, BOARD_HEIGHT)
        self.autoplayer = AutoPlayer(self, evaluator)
        self.autoplay_enabled = False
        self._autoplay_timer: Optional[Timer] = None
        self.state = GameState.IDLE
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.combo = 0
        self.drop_interval = self.rules.drop_interval_for_level(1)
        self.last_drop_ms = 0
        self.pieces_spawned = 0
        self._pending_events: List[Tuple[EventType, Dict[str, Any]]] = []
        self.reset()

    # Lifecycle

    def reset(self, seed: Optional[int] = None) -> None:
        self._disarm_autoplay()
        self.autoplay_enabled = False
        self.autoplayer.forget()
        if seed is not None:
            self.piece_source.reseed(seed)
        self.board.reset()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.combo = 0
        self.drop_interval = self.rules.drop_interval_for_level(self.level)
        self.state = GameState.IDLE
        self.current_piece = None
        self.pieces_spawned = 0
        self._pending_events = []
        self.next_piece = self._new_piece()
        self.last_drop_ms = self.scheduler.now_ms

    def start(self) -> None:
        if self.state is not GameState.IDLE:
            return
        self.state = GameState.RUNNING
        self.last_drop_ms = self.scheduler.now_ms
        self.spawn()
        if self.autoplay_enabled and self.state is GameState.RUNNING:
            self._arm_autoplay()

    def _new_piece(self) -> Piece:
        kind = self.piece_source.next_kind()
        return Piece.spawn(kind, self.board.width, self.config.spawn_y)

    def spawn(self) -> None:
        if self.state is not GameState.RUNNING:
            return
        assert self.next_piece is not None
        self.pieces_spawned += 1
        self.current_piece = Piece.spawn(
            self.next_piece.kind, self.board.width, self.config.spawn_y, serial=self.pieces_spawned
        )
        self.next_piece = self._new_piece()
        logger.debug("spawned %s, next %s", self.current_piece.kind.name, self.next_piece.kind.name)
        # Spawning is the only place a game can end
        if collides(self.board, self.current_piece):
            self._game_over()
        self._flush_events()

    def _game_over(self) -> None:
        self.state = GameState.OVER
        if self.autoplay_enabled:
            self._disarm_autoplay()
            self.autoplay_enabled = False
        logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
        self._defer(EventType.GAME_OVER, score=self.score, lines=self.lines, level=self.level)

    # Commands

    def move(self, direction: int) -> Outcome:
        if direction not in (-1, 1):
            raise ValueError(f"move direction must be -1 or +1, got {direction!r}")
        if not self.is_running or self.current_piece is None:
            return Outcome.REJECTED
        candidate = self.current_piece.moved(direction, 0)
        if collides(self.board, candidate):
            return Outcome.REJECTED
        self.current_piece = candidate
        self.events.emit(EventType.PIECE_MOVED, x=candidate.x, y=candidate.y, direction=direction)
        return Outcome.ACCEPTED

    def rotate(self) -> Outcome:
        if not self.is_running or self.current_piece is None:
            return Outcome.REJECTED
        candidate = self.current_piece.rotated()
        if collides(self.board, candidate):
            return Outcome.REJECTED
        self.current_piece = candidate
        self.events.emit(EventType.PIECE_ROTATED, x=candidate.x, y=candidate.y)
        return Outcome.ACCEPTED

    def soft_drop(self) -> Outcome:
        if not self.is_running or self.current_piece is None:
            return Outcome.REJECTED
        candidate = self.current_piece.moved(0, 1)
        if collides(self.board, candidate):
            self._lock_and_respawn()
            outcome = Outcome.LOCKED
        else:
            self.current_piece = candidate
            outcome = Outcome.ACCEPTED
        self.last_drop_ms = self.scheduler.now_ms
        return outcome

    def hard_drop(self) -> Outcome:
        if not self.is_running or self.current_piece is None:
            return Outcome.REJECTED
        rows = 0
        while not collides(self.board, self.current_piece.moved(0, 1)):
            self.current_piece = self.current_piece.moved(0, 1)
            rows += 1
        self.score += rows * self.rules.hard_drop_points
        self._lock_and_respawn()
        return Outcome.LOCKED

    def toggle_pause(self) -> bool:
        """Flip between running and paused; returns whether the game is now paused."""
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
            self._disarm_autoplay()
        elif self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
            # Resync so resuming does not trigger an instant gravity step
            self.last_drop_ms = self.scheduler.now_ms
            if self.autoplay_enabled:
                self._arm_autoplay()
        else:
            return False
        logger.debug("paused=%s", self.is_paused)
        self.events.emit(EventType.PAUSE_TOGGLED, paused=self.is_paused)
        return self.is_paused

    def set_autoplay(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self.autoplay_enabled:
            return
        self.autoplay_enabled = enabled
        if enabled:
            self.autoplayer.forget()
            if self.is_running:
                self._arm_autoplay()
        else:
            self._disarm_autoplay()
        logger.debug("autoplay %s", "on" if enabled else "off")

    def add_points(self, points: int) -> None:
        """Caller-side bonuses, e.g. one point per manual soft drop."""
        if points < 0:
            raise ValueError(f"score never decreases, got {points}")
        if self.state is GameState.OVER:
            return
        self.score += int(points)

    def apply(self, action: Action) -> Outcome:
        if action == Action.LEFT:
            return self.move(-1)
        if action == Action.RIGHT:
            return self.move(1)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        return Outcome.REJECTED

    def advance(self, dt_ms: int) -> None:
        """Move virtual time forward: autoplay ticks first, then one gravity check."""
        self.scheduler.advance(dt_ms)
        if self.is_running and self.scheduler.now_ms - self.last_drop_ms > self.effective_drop_interval:
            self.soft_drop()

    # Locking and scoring

    def _lock_and_respawn(self) -> None:
        assert self.current_piece is not None
        piece = self.current_piece
        self.board.lock(piece)
        self._defer(EventType.PIECE_LOCKED, kind=piece.kind, x=piece.x, y=piece.y)
        cleared = self.board.clear_full_rows()
        self._apply_clear(cleared)
        self.spawn()

    def _apply_clear(self, cleared: int) -> None:
        if cleared == 0:
            self.combo = 0
            return
        self.lines += cleared
        self.combo += 1
        gained = self.rules.score_for_lines(cleared, self.level) + self.rules.combo_score(self.combo, self.level)
        self.score += gained
        old_level = self.level
        self.level = self.rules.level_for_lines(self.lines)
        self.drop_interval = self.rules.drop_interval_for_level(self.level)
        logger.debug("cleared %d line(s) for %d points, combo=%d", cleared, gained, self.combo)
        self._defer(EventType.LINES_CLEARED, count=cleared, points=gained)
        if self.level > old_level:
            logger.debug("level up: %d (drop interval %d ms)", self.level, self.drop_interval)
            self._defer(EventType.LEVEL_UP, level=self.level)
        if self.combo > 1:
            self._defer(EventType.COMBO, combo=self.combo)

    def _defer(self, event_type: EventType, **data: Any) -> None:
        self._pending_events.append((event_type, data))

    def _flush_events(self) -> None:
        # Lock outcomes reach listeners only once the next piece is in place
        pending, self._pending_events = self._pending_events, []
        for event_type, data in pending:
            self.events.emit(event_type, **data)

    # Autoplay timer

    def _arm_autoplay(self) -> None:
        if self._autoplay_timer is None:
            self._autoplay_timer = self.scheduler.every(self.config.autoplay_period_ms, self._autoplay_tick)

    def _disarm_autoplay(self) -> None:
        self.scheduler.cancel(self._autoplay_timer)
        self._autoplay_timer = None

    def _autoplay_tick(self) -> None:
        if self.autoplay_enabled and self.is_running:
            self.autoplayer.tick()

    # Queries

    @property
    def effective_drop_interval(self) -> int:
        if self.autoplay_enabled:
            return max(
                self.config.autoplay_min_drop_interval_ms,
                self.drop_interval // self.config.autoplay_speedup,
            )
        return self.drop_interval

    @property
    def is_running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def is_over(self) -> bool:
        return self.state is GameState.OVER

    def cells(self) -> np.ndarray:
        return self.board.cells()

    def get_state(self) -> Dict[str, Any]:
        # Overlay the falling piece as negative color ids
        grid = self.board.grid.copy()
        piece = self.current_piece
        if piece is not None and self.state in (GameState.RUNNING, GameState.PAUSED):
            for x, y in piece.cells():
                if self.board.is_inside(x, y):
                    grid[y, x] = -piece.color
        return {
            "grid": grid,
            "piece": int(piece.kind) if piece is not None else 0,
            "next_piece": int(self.next_piece.kind) if self.next_piece is not None else 0,
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "combo": self.combo,
            "state": self.state.value,
            "autoplay": self.autoplay_enabled,
        }
