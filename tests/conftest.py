from __future__ import annotations

from typing import Callable, List

import pytest

pytest_plugins = ["nicegui.testing.user_plugin"]


class ManualTimer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by an explicit clock instead of wall time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: List[ManualTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [timer for timer in self.active if timer.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self.now = timer.when
            timer.cancelled = True
            timer.callback()
        self.now = target


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
