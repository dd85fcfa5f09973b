# src/focus_tracker/timer/focus_timer.py

"""
Focus (pomodoro) countdown timer.

A single-entity state machine with no clock of its own: an external cadence
calls tick() once per elapsed second (see ticker.py). This keeps the machine
deterministic; tests drive it by calling tick() N times.

Key invariants:
- 0 <= seconds <= 59, and the clock never exceeds the session length,
- while running, each tick removes exactly one second,
- the tick that reaches 0:00 completes the session: TIMER_COMPLETED is emitted
  and the machine is left exactly as reset() leaves it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.events import EventBus, EventKind

logger = logging.getLogger(__name__)

DEFAULT_SESSION_MINUTES = 25


@dataclass(slots=True, frozen=True)
class TimerSnapshot:
    minutes: int
    seconds: int
    running: bool
    session_minutes: int = DEFAULT_SESSION_MINUTES

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    @property
    def is_terminal(self) -> bool:
        return self.minutes == 0 and self.seconds == 0

    @property
    def clock(self) -> str:
        return format_clock(self.minutes, self.seconds)


def format_clock(minutes: int, seconds: int) -> str:
    return f"{minutes:02d}:{seconds:02d}"


class FocusTimer:
    def __init__(
        self,
        bus: EventBus | None = None,
        *,
        session_minutes: int = DEFAULT_SESSION_MINUTES,
    ) -> None:
        if int(session_minutes) < 1:
            raise ValueError(f"session_minutes must be >= 1, got {session_minutes}")

        self._bus = bus if bus is not None else EventBus()
        self._session_minutes = int(session_minutes)
        self._minutes = self._session_minutes
        self._seconds = 0
        self._running = False

    @property
    def session_minutes(self) -> int:
        return self._session_minutes

    @property
    def running(self) -> bool:
        return self._running

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            minutes=self._minutes,
            seconds=self._seconds,
            running=self._running,
            session_minutes=self._session_minutes,
        )

    # ---- transitions ----

    def start(self) -> bool:
        """Returns False if the timer was already running."""
        if self._running:
            return False
        self._running = True
        logger.debug("Timer started at %s", format_clock(self._minutes, self._seconds))
        return True

    def pause(self) -> bool:
        """Returns False if the timer was already paused."""
        if not self._running:
            return False
        self._running = False
        logger.debug("Timer paused at %s", format_clock(self._minutes, self._seconds))
        return True

    def toggle(self) -> bool:
        """Start/pause in one control. Returns the new running flag."""
        if self._running:
            self.pause()
        else:
            self.start()
        return self._running

    def reset(self) -> None:
        self._running = False
        self._minutes = self._session_minutes
        self._seconds = 0
        logger.debug("Timer reset to %s", format_clock(self._minutes, self._seconds))

    def tick(self) -> bool:
        """
        Advance one second while running; no effect while paused.

        Returns True only on the tick that completes the session. That tick
        resets the clock before returning, so a running 00:00 is never observable.
        """
        if not self._running:
            return False

        if self._seconds > 0:
            self._seconds -= 1
        elif self._minutes > 0:
            self._minutes -= 1
            self._seconds = 59

        if self._minutes > 0 or self._seconds > 0:
            return False

        finished = self.snapshot()
        self.reset()
        logger.info("Focus session completed (%d min)", self._session_minutes)
        self._bus.emit(EventKind.TIMER_COMPLETED, finished)
        return True
