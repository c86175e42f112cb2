from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_block_ai.game import COLORS, GameSession


def _color_for_value(v: int) -> Tuple[int, int, int]:
    v = abs(v)
    return COLORS[v] if 0 <= v < len(COLORS) else (200, 200, 200)


class Renderer:
    """Draws the board, falling piece, next-piece preview and HUD."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font = None

    def window_size(self, session: GameSession) -> Tuple[int, int]:
        board = session.board
        width = self.margin * 3 + (board.width + self.panel_cells) * self.cell_size
        height = self.margin * 2 + board.height * self.cell_size
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                pygame.draw.rect(surf, _color_for_value(v), rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, session: GameSession) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        x0 = self.margin * 2 + session.board.width * self.cell_size
        y0 = self.margin
        nxt = session.next_piece
        if nxt is not None:
            for y, row in enumerate(nxt.shape):
                for x, v in enumerate(row):
                    if v:
                        rect = pygame.Rect(x0 + x * self.cell_size, y0 + y * self.cell_size,
                                           self.cell_size - 1, self.cell_size - 1)
                        pygame.draw.rect(screen, _color_for_value(int(v)), rect)
        lines = [
            f"score {session.score}",
            f"level {session.level}",
            f"lines {session.lines}",
            f"combo {session.combo}",
            "auto" if session.autoplay_enabled else "",
            "PAUSED" if session.is_paused else "",
            "GAME OVER - R restarts" if session.is_over else "",
        ]
        ty = y0 + 5 * self.cell_size
        for text in lines:
            if text:
                screen.blit(self._font.render(text, True, (230, 230, 230)), (x0, ty))
            ty += 26

    def draw(self, screen: pygame.Surface, session: GameSession) -> None:
        grid_surf = self._grid_surface(session.get_state()["grid"])
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, session)
        pygame.display.flip()
