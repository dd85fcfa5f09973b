# src/focus_tracker/notify/notifier.py

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from ..core.events import EventBus, EventKind
from ..core.ports import NotificationKind, Notifier

logger = logging.getLogger(__name__)

EVENT_NOTIFICATIONS: dict[EventKind, NotificationKind] = {
    EventKind.TASK_ADDED: NotificationKind.ADDED,
    EventKind.TASK_DELETED: NotificationKind.DELETED,
    EventKind.TASK_COMPLETED: NotificationKind.COMPLETED,
    EventKind.TIMER_COMPLETED: NotificationKind.TIMER_COMPLETED,
}

# Number of terminal bells per cue (the console stand-in for a tone).
BELLS: dict[NotificationKind, int] = {
    NotificationKind.ADDED: 1,
    NotificationKind.DELETED: 1,
    NotificationKind.COMPLETED: 2,
    NotificationKind.TIMER_COMPLETED: 3,
}

TIMER_DONE_MESSAGE = "Focus session complete! Take a break!"


class ConsoleNotifier:
    """
    Terminal notifier.

    - rings the bell (only when enabled and stdout is a TTY),
    - prints a line for the timer, since it finishes while the user is away.
    """

    def __init__(
        self,
        *,
        sound_enabled: bool = True,
        emit: Callable[[str], None] | None = None,
    ) -> None:
        self.sound_enabled = sound_enabled
        self._emit = emit or (lambda text: print(text, flush=True))

    def _bell(self, count: int) -> None:
        if not self.sound_enabled or not sys.stdout.isatty():
            return
        sys.stdout.write("\a" * count)
        sys.stdout.flush()

    def notify(self, kind: NotificationKind) -> None:
        logger.debug("notify kind=%s", kind.value)
        self._bell(BELLS.get(kind, 1))
        if kind == NotificationKind.TIMER_COMPLETED:
            self._emit(TIMER_DONE_MESSAGE)


def attach_notifications(bus: EventBus, notifier: Notifier) -> list[Callable[[], None]]:
    """Route core events to the notifier. Returns unsubscribe callables."""

    def _on_event(kind: EventKind, payload: object) -> None:
        try:
            notifier.notify(EVENT_NOTIFICATIONS[kind])
        except Exception:
            logger.debug("Notifier failed for %s.", kind.value, exc_info=True)

    return [bus.subscribe(kind, _on_event) for kind in EVENT_NOTIFICATIONS]
