from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass(eq=False)
class Timer:
    period_ms: int
    next_due_ms: int
    callback: Callable[[], None]
    active: bool = True


class Scheduler:
    """Virtual-time clock with fixed-period timers.

    Time only moves through `advance`, so game logic can be driven by tests
    and by a wall-clock adapter alike. Timers fire in due order; a callback
    may cancel any timer, including its own.
    """

    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = int(now_ms)
        self._timers: List[Timer] = []

    def every(self, period_ms: int, callback: Callable[[], None]) -> Timer:
        if period_ms <= 0:
            raise ValueError(f"timer period must be positive, got {period_ms}")
        timer = Timer(int(period_ms), self.now_ms + int(period_ms), callback)
        self._timers.append(timer)
        return timer

    def cancel(self, timer: Optional[Timer]) -> None:
        if timer is None:
            return
        timer.active = False
        if timer in self._timers:
            self._timers.remove(timer)

    @property
    def pending(self) -> int:
        return len(self._timers)

    def advance(self, dt_ms: int) -> None:
        if dt_ms < 0:
            raise ValueError(f"cannot advance by a negative delta ({dt_ms} ms)")
        target = self.now_ms + int(dt_ms)
        while True:
            due = [t for t in self._timers if t.active and t.next_due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_due_ms)
            self.now_ms = timer.next_due_ms
            timer.next_due_ms += timer.period_ms
            timer.callback()
        self.now_ms = target
