from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict

import pygame

from falling_block_ai.game import GameConfig, GameSession
from .renderer import Renderer


def _soft_drop(session: GameSession) -> None:
    # Manual soft drops earn a point; gravity drops do not
    session.soft_drop()
    if session.is_running:
        session.add_points(session.rules.soft_drop_points)


def _restart(session: GameSession) -> None:
    session.reset()
    session.start()


KEY_TO_COMMAND: Dict[int, Callable[[GameSession], object]] = {
    pygame.K_LEFT: lambda s: s.move(-1),
    pygame.K_RIGHT: lambda s: s.move(1),
    pygame.K_UP: lambda s: s.rotate(),
    pygame.K_DOWN: _soft_drop,
    pygame.K_SPACE: lambda s: s.hard_drop(),
    pygame.K_p: lambda s: s.toggle_pause(),
    pygame.K_a: lambda s: s.set_autoplay(not s.autoplay_enabled),
    pygame.K_r: _restart,
}


def run(seed: int | None = None, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = GameSession(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(session))
        pygame.display.set_caption("Falling Blocks")
        session.start()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            command(session)

            # Wall-clock frame delta drives gravity and the autoplay timer
            session.advance(clock.tick(fps))
            renderer.draw(screen, session)
    finally:
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser(description="Play the falling-block game with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(message)s")
    run(seed=args.seed, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
