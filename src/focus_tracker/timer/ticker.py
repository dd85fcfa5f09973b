# src/focus_tracker/timer/ticker.py

from __future__ import annotations

"""
Timer ticker.

The one-second cadence that drives FocusTimer.tick(). The timer itself has no
notion of time; this loop measures elapsed monotonic time and applies one
tick per full interval, so a delayed wake-up catches up instead of drifting.

A paused timer is never ticked (elapsed time while paused is discarded).
"""

import asyncio
import contextlib
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .focus_timer import FocusTimer

if TYPE_CHECKING:
    from ..core.state import AppState

logger = logging.getLogger(__name__)


async def run_timer_ticker(
        timer: FocusTimer,
        *,
        interval_seconds: float = 1.0,
        lock: contextlib.AbstractContextManager | None = None,
        clock: Callable[[], float] = time.monotonic,
) -> None:
    """
    Tick `timer` once per elapsed interval while it is running.

    `lock` (if given) is held around every batch of ticks; the console host
    passes AppState.lock so commands and ticks never interleave.

    To stop the ticker, cancel the coroutine/task.
    """
    interval = max(0.01, float(interval_seconds))
    guard = lock if lock is not None else contextlib.nullcontext()
    last = clock()

    while True:
        await asyncio.sleep(interval)

        now = clock()
        due = int((now - last) // interval)
        if due <= 0:
            continue
        last += due * interval

        try:
            with guard:
                if not timer.running:
                    continue
                if due > 1:
                    logger.debug("Ticker catching up %d ticks", due)
                for _ in range(due):
                    if timer.tick():
                        break
        except Exception:
            logger.exception("timer tick failed")


@dataclass(slots=True)
class TickerBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except Exception:
            logger.debug("Failed to signal ticker stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_until_stopped(state: AppState, stop_event: asyncio.Event) -> None:
    interval = float(getattr(state.settings, "tick_seconds", 1.0))
    ticker = asyncio.create_task(
        run_timer_ticker(state.timer, interval_seconds=interval, lock=state.lock)
    )
    try:
        await stop_event.wait()
    finally:
        ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker


def start_ticker_in_background(state: AppState) -> TickerBackgroundRunner | None:
    """
    Run the ticker on its own event loop in a daemon thread.

    The console REPL blocks on input(), so the cadence cannot share its thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_until_stopped(state, stop_event))
        finally:
            with contextlib.suppress(Exception):
                loop.close()

    t = threading.Thread(target=runner, name="focus-ticker", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Ticker thread did not initialize properly.")
        return None

    logger.info("Timer ticker started (interval=%ss).", getattr(state.settings, "tick_seconds", 1.0))
    return TickerBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
