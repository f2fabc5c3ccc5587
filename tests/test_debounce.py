from __future__ import annotations

import asyncio

import pytest
from moodpad.debounce import Debouncer


def test_fires_after_quiet_period(scheduler) -> None:
    fired: list[float] = []
    debouncer = Debouncer(0.5, lambda: fired.append(scheduler.now), scheduler=scheduler)

    debouncer.arm()
    scheduler.advance(0.4)
    assert fired == []
    assert debouncer.pending

    scheduler.advance(0.1)
    assert fired == [0.5]
    assert not debouncer.pending


def test_rearm_cancels_previous_timer(scheduler) -> None:
    fired: list[float] = []
    debouncer = Debouncer(0.5, lambda: fired.append(scheduler.now), scheduler=scheduler)

    first = debouncer.arm()
    scheduler.advance(0.25)
    second = debouncer.arm()

    assert second == first + 1
    assert len(scheduler.active) == 1
    scheduler.advance(0.25)
    assert fired == []
    scheduler.advance(0.25)
    assert fired == [0.75]


def test_superseded_fire_is_ignored(scheduler) -> None:
    fired: list[int] = []
    debouncer = Debouncer(0.5, lambda: fired.append(debouncer.timer_id), scheduler=scheduler)

    debouncer.arm()
    stale_timer = scheduler.timers[0]
    debouncer.arm()
    stale_timer.callback()

    assert fired == []
    assert debouncer.pending


def test_cancel_and_flush(scheduler) -> None:
    fired: list[str] = []
    debouncer = Debouncer(0.5, lambda: fired.append("fired"), scheduler=scheduler)

    assert not debouncer.cancel()
    assert not debouncer.flush()

    debouncer.arm()
    assert debouncer.cancel()
    scheduler.advance(1.0)
    assert fired == []

    debouncer.arm()
    assert debouncer.flush()
    assert fired == ["fired"]
    scheduler.advance(1.0)
    assert fired == ["fired"]


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        Debouncer(-1, lambda: None)


def test_default_scheduler_uses_event_loop() -> None:
    async def scenario() -> list[str]:
        fired: list[str] = []
        debouncer = Debouncer(0.01, lambda: fired.append("fired"))
        debouncer.arm()
        debouncer.arm()
        await asyncio.sleep(0.05)
        return fired

    assert asyncio.run(scenario()) == ["fired"]
