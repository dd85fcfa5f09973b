# src/focus_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import UTC, date, datetime, time
from typing import Any

from ..core.events import EventBus, EventKind
from .task_models import (
    NO_OP,
    NOT_FOUND,
    NoOp,
    NotFound,
    Task,
    TaskStats,
    parse_due_date,
    parse_due_time,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """
    A task is overdue iff it has a due date, is not completed, and its deadline
    (due_time, or 23:59 when absent) is strictly before now.

    Deadlines are local wall-clock values, so now is compared as a naive local
    datetime. Evaluated on every call; nothing is cached.
    """
    if task.completed:
        return False
    due = task.due_at()
    if due is None:
        return False
    if now is None:
        now = datetime.now()
    elif now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return due < now


class TaskStore:
    """
    In-memory, ordered task list (newest first).

    Owns every Task it holds: reads hand out frozen values, and the only
    post-creation change (completed) replaces the stored value.

    Every successful mutation emits TASKS_CHANGED after its domain event, so a
    host can persist the list without caring which operation ran.

    Thread-safety:
    - none; a multi-threaded host wraps calls in one lock (see AppState.lock)
    """

    def __init__(
        self,
        bus: EventBus | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._bus = bus if bus is not None else EventBus()
        self._clock = clock
        self._tasks: list[Task] = []
        self._next_id = 1

    @property
    def bus(self) -> EventBus:
        return self._bus

    # ---- low-level helpers ----

    def _allocate_id(self) -> int:
        tid = self._next_id
        self._next_id += 1
        return tid

    def _index_of(self, task_id: int) -> int | None:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return None

    def _changed(self) -> None:
        self._bus.emit(EventKind.TASKS_CHANGED)

    # ---- mutations ----

    def add(
        self,
        text: str,
        due_date: date | str | None = None,
        due_time: time | str | None = None,
    ) -> Task | NoOp:
        clean = (text or "").strip()
        if not clean:
            logger.debug("add ignored: blank text")
            return NO_OP

        # Parse before mutating so a bad date leaves the store untouched.
        parsed_date = parse_due_date(due_date)
        parsed_time = parse_due_time(due_time)

        task = Task(
            id=self._allocate_id(),
            text=clean,
            created_at=self._clock(),
            completed=False,
            due_date=parsed_date,
            due_time=parsed_time,
        )
        self._tasks.insert(0, task)
        logger.debug("Task added id=%s due=%s %s", task.id, parsed_date, parsed_time)

        self._bus.emit(EventKind.TASK_ADDED, task)
        self._changed()
        return task

    def toggle(self, task_id: int) -> Task | NotFound:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("toggle: task id=%s not found", task_id)
            return NOT_FOUND

        task = replace(self._tasks[idx], completed=not self._tasks[idx].completed)
        self._tasks[idx] = task
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)

        # Un-completing is silent; only the persistence signal fires.
        if task.completed:
            self._bus.emit(EventKind.TASK_COMPLETED, task)
        self._changed()
        return task

    def delete(self, task_id: int) -> Task | NotFound:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("delete: task id=%s not found", task_id)
            return NOT_FOUND

        task = self._tasks.pop(idx)
        logger.debug("Task deleted id=%s", task.id)

        self._bus.emit(EventKind.TASK_DELETED, task)
        self._changed()
        return task

    def clear_completed(self) -> int:
        kept = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(kept)
        if removed == 0:
            return 0

        self._tasks = kept
        logger.debug("Cleared %d completed task(s)", removed)
        self._changed()
        return removed

    # ---- queries ----

    def get(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def overdue_tasks(self, now: datetime | None = None) -> list[Task]:
        return [t for t in self._tasks if is_overdue(t, now)]

    def is_overdue(self, task: Task, now: datetime | None = None) -> bool:
        return is_overdue(task, now)

    def stats(self, now: datetime | None = None) -> TaskStats:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        overdue = sum(1 for t in self._tasks if is_overdue(t, now))
        return TaskStats(
            total=total,
            completed=completed,
            remaining=total - completed,
            overdue=overdue,
        )

    # ---- serialization ----

    def to_records(self) -> list[dict[str, Any]]:
        """Flat JSON-compatible records, newest first."""
        return [
            {
                "id": t.id,
                "text": t.text,
                "completed": t.completed,
                "dueDate": t.due_date.isoformat() if t.due_date else None,
                "dueTime": t.due_time.strftime("%H:%M") if t.due_time else None,
                "createdAt": t.created_at.isoformat(),
            }
            for t in self._tasks
        ]

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        bus: EventBus | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> TaskStore:
        """
        Rebuild a store from persisted records (order preserved, no events).

        Malformed records are skipped. Records without an integer id get a
        fresh one; duplicate ids keep the first occurrence.
        """
        store = cls(bus, clock=clock)
        loaded: list[Task] = []
        pending_ids: list[int] = []
        seen: set[int] = set()

        for raw in records:
            try:
                task = _record_to_task(raw, fallback_created_at=clock())
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed task record: %r", raw)
                continue

            if task.id in seen:
                logger.warning("Skipping duplicate task id=%s", task.id)
                continue
            if task.id > 0:
                seen.add(task.id)
            else:
                pending_ids.append(len(loaded))
            loaded.append(task)

        store._next_id = max(seen, default=0) + 1
        for idx in pending_ids:
            loaded[idx] = replace(loaded[idx], id=store._allocate_id())

        store._tasks = loaded
        logger.debug("TaskStore loaded %d task(s)", len(loaded))
        return store


def _record_to_task(raw: Mapping[str, Any], *, fallback_created_at: datetime) -> Task:
    if not isinstance(raw, Mapping):
        raise TypeError("task record must be an object")

    text = raw["text"]
    if not isinstance(text, str):
        raise TypeError("task text must be a string")
    text = text.strip()
    if not text:
        raise ValueError("task text is blank")

    raw_id = raw.get("id")
    # bool is an int subclass; 0 marks "needs a fresh id".
    task_id = raw_id if isinstance(raw_id, int) and not isinstance(raw_id, bool) and raw_id > 0 else 0

    created_raw = raw.get("createdAt")
    created_at = fallback_created_at
    if isinstance(created_raw, str) and created_raw.strip():
        created_at = datetime.fromisoformat(created_raw.strip())
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)

    due_date = parse_due_date(raw.get("dueDate") or None)
    due_time = parse_due_time(raw.get("dueTime") or None)

    completed = raw.get("completed", False)
    if not isinstance(completed, bool):
        raise TypeError("completed must be a boolean")

    return Task(
        id=task_id,
        text=text,
        created_at=created_at,
        completed=completed,
        due_date=due_date,
        due_time=due_time,
    )
