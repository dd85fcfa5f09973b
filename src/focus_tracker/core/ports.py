# src/focus_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) for the collaborators around the core.

The host depends on Protocols instead of concrete implementations, so storage
and notification backends stay swappable and tests can use in-memory fakes.
"""

from enum import StrEnum
from typing import Protocol


class NotificationKind(StrEnum):
    ADDED = "added"
    DELETED = "deleted"
    COMPLETED = "completed"
    TIMER_COMPLETED = "timer_completed"


class KeyValueStore(Protocol):
    """
    Durable string key-value storage (the host keeps JSON text under fixed keys).

    load() returns None when nothing was saved under key.
    """

    def load(self, key: str) -> str | None: ...
    def save(self, key: str, value: str) -> None: ...


class Notifier(Protocol):
    """Audible/visual cue for core events. Must not raise into the caller."""

    def notify(self, kind: NotificationKind) -> None: ...
