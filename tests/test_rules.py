import pytest

from falling_block_ai.game import ScoringRules


def test_line_scores_scale_with_level():
    rules = ScoringRules()
    assert [rules.score_for_lines(n, 1) for n in range(5)] == [0, 100, 300, 500, 800]
    assert rules.score_for_lines(4, 3) == 2400
    assert rules.score_for_lines(0, 9) == 0


def test_combo_bonus_needs_two_consecutive_clears():
    rules = ScoringRules()
    assert rules.combo_score(0, 1) == 0
    assert rules.combo_score(1, 5) == 0
    assert rules.combo_score(2, 1) == 100
    assert rules.combo_score(3, 2) == 300


def test_level_and_interval_progression():
    rules = ScoringRules()
    assert rules.level_for_lines(0) == 1
    assert rules.level_for_lines(9) == 1
    assert rules.level_for_lines(10) == 2
    assert rules.level_for_lines(95) == 10
    assert rules.drop_interval_for_level(1) == 1000
    assert rules.drop_interval_for_level(2) == 900
    assert rules.drop_interval_for_level(10) == 100
    assert rules.drop_interval_for_level(25) == 100


def test_more_than_four_lines_is_rejected():
    with pytest.raises(ValueError):
        ScoringRules().score_for_lines(5, 1)
