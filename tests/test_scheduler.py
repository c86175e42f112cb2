import pytest

from falling_block_ai.game import Scheduler


def test_timer_fires_on_each_period():
    scheduler = Scheduler()
    fired = []
    scheduler.every(200, lambda: fired.append(scheduler.now_ms))
    scheduler.advance(450)
    assert fired == [200, 400]
    assert scheduler.now_ms == 450
    scheduler.advance(150)
    assert fired == [200, 400, 600]


def test_timers_fire_in_due_order():
    scheduler = Scheduler()
    fired = []
    scheduler.every(300, lambda: fired.append("slow"))
    scheduler.every(200, lambda: fired.append("fast"))
    scheduler.advance(600)
    assert fired == ["fast", "slow", "fast", "slow", "fast"]


def test_callback_can_cancel_its_own_timer():
    scheduler = Scheduler()
    fired = []

    def once():
        fired.append(scheduler.now_ms)
        scheduler.cancel(timer)

    timer = scheduler.every(100, once)
    scheduler.advance(1000)
    assert fired == [100]
    assert scheduler.pending == 0


def test_invalid_arguments():
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.every(0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1)
