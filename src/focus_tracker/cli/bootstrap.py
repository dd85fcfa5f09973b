# src/focus_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- restores persisted tasks and display mode,
- wires the event bus to the notifier and to autosave.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import get_settings
from ..core.events import EventBus
from ..core.ports import KeyValueStore, Notifier
from ..core.state import AppState
from ..notify.notifier import ConsoleNotifier, attach_notifications
from ..storage.kv_store import MemoryKeyValueStore, SqliteKeyValueStore
from ..storage.persistence import attach_autosave, load_dark_mode, load_tasks
from ..timer.focus_timer import FocusTimer

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if not getattr(settings, "in_memory", False):
        settings.state_db_path.parent.mkdir(parents=True, exist_ok=True)


def _open_kv(settings) -> KeyValueStore:
    if getattr(settings, "in_memory", False):
        logger.info("Using in-memory state (nothing will be persisted).")
        return MemoryKeyValueStore()
    return SqliteKeyValueStore(settings.state_db_path)


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueStore | None = None,
    notifier: Notifier | None = None,
    emit: Callable[[str], None] | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    kv/notifier are injectable for tests; by default a SQLite store under
    settings.state_db_path and a ConsoleNotifier are used.
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = _open_kv(settings)
    if notifier is None:
        notifier = ConsoleNotifier(sound_enabled=bool(getattr(settings, "sound_enabled", True)), emit=emit)

    bus = EventBus()
    state = AppState(
        settings=settings,
        bus=bus,
        tasks=load_tasks(kv, bus),
        timer=FocusTimer(bus, session_minutes=int(getattr(settings, "session_minutes", 25))),
        kv=kv,
        notifier=notifier,
        dark_mode=load_dark_mode(kv),
    )

    attach_notifications(bus, notifier)
    attach_autosave(state)
    return state
