from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    combo_bonus: int = 50
    hard_drop_points: int = 2
    soft_drop_points: int = 1
    lines_per_level: int = 10
    base_drop_interval_ms: int = 1000
    drop_interval_step_ms: int = 100
    min_drop_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        if lines >= len(self.line_clear_scores):
            raise ValueError(f"a single lock clears at most 4 lines, got {lines}")
        return self.line_clear_scores[lines] * level

    def combo_score(self, combo: int, level: int) -> int:
        return self.combo_bonus * combo * level if combo > 1 else 0

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def drop_interval_for_level(self, level: int) -> int:
        return max(
            self.min_drop_interval_ms,
            self.base_drop_interval_ms - (level - 1) * self.drop_interval_step_ms,
        )
