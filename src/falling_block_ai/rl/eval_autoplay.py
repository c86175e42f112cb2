"""Headless autoplay benchmark.

Plays whole games by advancing virtual time, so a game that would take
minutes on screen finishes in well under a second.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from falling_block_ai.game import Action, GameConfig, GameSession


logger = logging.getLogger("eval_autoplay")


@dataclass
class GameResult:
    score: int
    lines: int
    level: int
    pieces: int
    game_over: bool


def play_autoplay_game(seed: Optional[int], max_pieces: int = 500) -> GameResult:
    session = GameSession(GameConfig(random_seed=seed))
    session.set_autoplay(True)
    session.start()
    period = session.config.autoplay_period_ms
    while session.is_running and session.pieces_spawned <= max_pieces:
        session.advance(period)
    return GameResult(session.score, session.lines, session.level, session.pieces_spawned, session.is_over)


def play_random_game(seed: Optional[int], max_pieces: int = 500) -> GameResult:
    rng = random.Random(seed)
    session = GameSession(GameConfig(random_seed=seed))
    session.start()
    actions = [Action.LEFT, Action.RIGHT, Action.ROTATE, Action.SOFT_DROP, Action.HARD_DROP]
    while session.is_running and session.pieces_spawned <= max_pieces:
        session.apply(rng.choice(actions))
        session.advance(16)
    return GameResult(session.score, session.lines, session.level, session.pieces_spawned, session.is_over)


def evaluate(agent: str, games: int, max_pieces: int, seed: int) -> List[GameResult]:
    play = play_autoplay_game if agent == "autoplay" else play_random_game
    results: List[GameResult] = []
    for i in range(games):
        result = play(seed + i, max_pieces)
        logger.info(
            "game %d/%d score=%d lines=%d level=%d pieces=%d%s",
            i + 1, games, result.score, result.lines, result.level, result.pieces,
            " (topped out)" if result.game_over else "",
        )
        results.append(result)
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--agent", choices=["autoplay", "random"], default="autoplay")
    p.add_argument("--games", type=int, default=5)
    p.add_argument("--max-pieces", type=int, default=500)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--log-level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(message)s")
    results = evaluate(args.agent, args.games, args.max_pieces, args.seed)
    scores = np.array([r.score for r in results], dtype=np.float64)
    lines = np.array([r.lines for r in results], dtype=np.float64)
    print(f"{args.agent}: games={len(results)} mean_score={scores.mean():.1f} "
          f"max_score={scores.max():.0f} mean_lines={lines.mean():.1f}")


if __name__ == "__main__":  # pragma: no cover
    main()
