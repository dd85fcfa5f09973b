# src/focus_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Final

# Date-only due dates count as due at the end of that day.
END_OF_DAY: Final = time(23, 59)


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    text: str
    created_at: datetime
    completed: bool = False
    due_date: date | None = None
    due_time: time | None = None

    def due_at(self) -> datetime | None:
        """Local wall-clock deadline, or None when no due date is set."""
        if self.due_date is None:
            return None
        return datetime.combine(self.due_date, self.due_time or END_OF_DAY)


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    completed: int
    remaining: int
    overdue: int


class NotFound:
    """Result of toggle/delete for an unknown id. Falsy; a benign no-op."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


class NoOp:
    """Result of add() with blank text: nothing was created."""

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_OP"


NOT_FOUND: Final = NotFound()
NO_OP: Final = NoOp()


def parse_due_date(raw: date | str | None) -> date | None:
    if isinstance(raw, datetime):
        return raw.date()
    if raw is None or isinstance(raw, date):
        return raw
    raw = raw.strip()
    if not raw:
        return None
    return date.fromisoformat(raw)


def parse_due_time(raw: time | str | None) -> time | None:
    """Accept HH:MM (or HH:MM:SS); seconds and any UTC offset are dropped."""
    if raw is None:
        return None
    if isinstance(raw, time):
        return raw.replace(second=0, microsecond=0, tzinfo=None)
    raw = raw.strip()
    if not raw:
        return None
    return time.fromisoformat(raw).replace(second=0, microsecond=0, tzinfo=None)
