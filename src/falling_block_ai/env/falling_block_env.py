from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block_ai.game import COLORS, Action, GameConfig, GameSession, TetrominoType


_PALETTE = np.array(COLORS, dtype=np.uint8)


class FallingBlockEnv(gym.Env):
    """One command per step on a 10x20 falling-block game.

    There is no gravity between steps; the agent decides when pieces drop.
    Reward is the change in engine score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000, step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.session.board.height, self.session.board.width
        n_kinds = len(TetrominoType) + 1
        # Board holds locked colors; the falling piece appears as negative ids
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8),
                "piece": spaces.Discrete(n_kinds),
                "next_piece": spaces.Discrete(n_kinds),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.session.get_state()
        return {
            "board": state["grid"].astype(np.int8),
            "piece": state["piece"],
            "next_piece": state["next_piece"],
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "lines": self.session.lines,
            "level": self.session.level,
            "combo": self.session.combo,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.session.reset(seed)
        self.session.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"invalid action {action!r}")
        score_before = self.session.score
        outcome = self.session.apply(Action(int(action)))
        self._steps += 1

        reward = float(self.session.score - score_before) + self.step_penalty
        terminated = self.session.is_over
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward += self.terminal_penalty

        info = self._get_info()
        info["outcome"] = outcome.name.lower()
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = np.abs(self.session.get_state()["grid"])
        cell = 12
        img = _PALETTE[grid]
        return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)

    def close(self) -> None:
        pass
