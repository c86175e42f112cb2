import gymnasium as gym
import numpy as np
import pytest

import falling_block_ai.env  # noqa: F401
from falling_block_ai.env.falling_block_env import FallingBlockEnv
from falling_block_ai.game import Action


def test_reset_returns_valid_observation():
    env = FallingBlockEnv()
    obs, info = env.reset(seed=5)
    assert env.observation_space.contains(obs)
    assert obs["board"].shape == (20, 10)
    assert (obs["board"] < 0).sum() == 4
    assert info["score"] == 0


def test_same_seed_same_pieces():
    env = FallingBlockEnv()
    first, _ = env.reset(seed=9)
    again, _ = env.reset(seed=9)
    assert first["piece"] == again["piece"]
    assert first["next_piece"] == again["next_piece"]


def test_hard_drops_until_top_out():
    env = FallingBlockEnv()
    env.reset(seed=0)
    total = 0.0
    terminated = False
    for _ in range(500):
        _, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        assert reward >= 0
        total += reward
        if terminated:
            break
    assert terminated
    assert total == info["score"]


def test_invalid_action_raises():
    env = FallingBlockEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(42)


def test_registered_env_renders_rgb():
    env = gym.make("FallingBlocks-10x20-v0", render_mode="rgb_array")
    env.reset(seed=1)
    env.step(int(Action.LEFT))
    frame = env.render()
    assert frame.shape == (240, 120, 3)
    assert frame.dtype == np.uint8
    env.close()


def test_truncates_after_max_steps():
    env = FallingBlockEnv(max_episode_steps=3)
    env.reset(seed=2)
    results = [env.step(int(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]
