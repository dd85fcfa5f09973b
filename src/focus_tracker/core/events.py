# src/focus_tracker/core/events.py

from __future__ import annotations

"""
In-process event bus.

The core emits discrete events; collaborators (notifier, autosave, console)
subscribe for side effects. Handlers run synchronously inside the emitting
operation, in subscription order.

A failing handler is logged and skipped: side effects must never break the
state transition that triggered them.
"""

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class EventKind(StrEnum):
    TASK_ADDED = "task_added"
    TASK_COMPLETED = "task_completed"
    TASK_DELETED = "task_deleted"
    # Fired after every successful task mutation (payload None); used for persistence.
    TASKS_CHANGED = "tasks_changed"
    TIMER_COMPLETED = "timer_completed"


EventHandler = Callable[[EventKind, Any], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[EventHandler]] = {}

    def subscribe(self, kind: EventKind, handler: EventHandler) -> Callable[[], None]:
        """
        Register handler for kind.

        Returns a callable that removes the subscription again.
        """
        handlers = self._handlers.setdefault(kind, [])
        handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def emit(self, kind: EventKind, payload: Any = None) -> None:
        for handler in list(self._handlers.get(kind, ())):
            try:
                handler(kind, payload)
            except Exception:
                logger.exception("Event handler failed kind=%s handler=%r", kind.value, handler)

    def handler_count(self, kind: EventKind) -> int:
        return len(self._handlers.get(kind, ()))
