# tests/test_ticker.py

from __future__ import annotations

import asyncio
import time

import pytest

from focus_tracker.core.events import EventBus, EventKind
from focus_tracker.timer.focus_timer import FocusTimer
from focus_tracker.timer.ticker import run_timer_ticker, start_ticker_in_background


class SteppingClock:
    """Fake monotonic clock: every call advances by `step` seconds."""

    def __init__(self, step: float) -> None:
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


async def _run_for(coro, seconds: float) -> None:
    runner = asyncio.create_task(coro)
    await asyncio.sleep(seconds)
    runner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await runner


@pytest.mark.asyncio
async def test_ticker_advances_running_timer() -> None:
    timer = FocusTimer()
    timer.start()

    # Each loop iteration sees exactly one elapsed interval.
    await _run_for(run_timer_ticker(timer, interval_seconds=0.01, clock=SteppingClock(0.01)), 0.2)

    remaining = timer.snapshot().total_seconds
    assert 0 < remaining < 25 * 60
    assert timer.running is True


@pytest.mark.asyncio
async def test_ticker_never_advances_paused_timer() -> None:
    timer = FocusTimer()

    await _run_for(run_timer_ticker(timer, interval_seconds=0.01, clock=SteppingClock(0.05)), 0.1)

    assert timer.snapshot().clock == "25:00"
    assert timer.running is False


@pytest.mark.asyncio
async def test_ticker_catches_up_and_completes_once() -> None:
    bus = EventBus()
    done: list[object] = []
    bus.subscribe(EventKind.TIMER_COMPLETED, lambda kind, payload: done.append(payload))
    timer = FocusTimer(bus, session_minutes=1)
    timer.start()

    # A single wake-up "sees" 10 minutes pass: the session completes, the rest is dropped.
    await _run_for(run_timer_ticker(timer, interval_seconds=0.01, clock=SteppingClock(6.0)), 0.1)

    assert len(done) == 1
    assert timer.running is False
    assert timer.snapshot().clock == "01:00"


def test_background_runner_ticks_and_stops(state) -> None:
    state.timer.start()
    runner = start_ticker_in_background(state)
    assert runner is not None

    time.sleep(0.3)

    runner.stop()
    runner.join(timeout=5.0)

    assert not runner.thread.is_alive()
    with state.lock:
        assert state.timer.snapshot().total_seconds < 25 * 60
