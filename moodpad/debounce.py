"""Single-timer debouncing on top of an event-loop scheduler."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """Run ``callback`` once ``delay`` seconds pass without a new ``arm()``.

    Every arm gets a fresh timer id and cancels the previously armed timer. A
    fire carrying a superseded id is ignored, so a late callback from a
    scheduler that could not cancel in time never runs the action.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError("Debounce delay must be non-negative")
        self.delay = delay
        self.callback = callback
        self._scheduler = scheduler or loop_scheduler
        self._timer_id = 0
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def timer_id(self) -> int:
        return self._timer_id

    def arm(self) -> int:
        self.cancel()
        self._timer_id += 1
        timer_id = self._timer_id
        self._handle = self._scheduler(self.delay, lambda: self._fire(timer_id))
        return timer_id

    def cancel(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def flush(self) -> bool:
        """Fire the pending timer now; returns whether anything was pending."""

        if not self.cancel():
            return False
        self.callback()
        return True

    def _fire(self, timer_id: int) -> None:
        if timer_id != self._timer_id or self._handle is None:
            return
        self._handle = None
        self.callback()
