"""Gymnasium environments for the falling-block engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FallingBlocks-10x20-v0",
    entry_point="falling_block_ai.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlocks-10x20-v0"]
