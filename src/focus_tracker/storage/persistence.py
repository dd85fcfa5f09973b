# src/focus_tracker/storage/persistence.py

"""
Persisted session state on top of a KeyValueStore.

Layout (JSON text under fixed keys):
- "todos":    array of flat task records, newest first
              {id, text, completed, dueDate, dueTime, createdAt}
- "darkMode": boolean display-mode preference

Loading is best-effort: missing or corrupt data yields an empty list / False,
never an exception. Saving failures are logged; in-memory state is kept.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..core.events import EventBus, EventKind
from ..core.ports import KeyValueStore
from ..tasks.task_store import TaskStore

if TYPE_CHECKING:
    from ..core.state import AppState

logger = logging.getLogger(__name__)

TODOS_KEY = "todos"
DARK_MODE_KEY = "darkMode"


def encode_tasks(store: TaskStore) -> str:
    return json.dumps(store.to_records(), ensure_ascii=False)


def decode_tasks(raw: str | None) -> list[dict[str, Any]]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning("Saved task list is not valid JSON; starting empty.")
        return []
    if not isinstance(data, list):
        logger.warning("Saved task list is not an array; starting empty.")
        return []
    return [r for r in data if isinstance(r, dict)]


def load_tasks(kv: KeyValueStore, bus: EventBus | None = None) -> TaskStore:
    try:
        raw = kv.load(TODOS_KEY)
    except Exception:
        logger.exception("Failed to read %r; starting with an empty task list.", TODOS_KEY)
        raw = None

    store = TaskStore.from_records(decode_tasks(raw), bus)
    logger.info("Loaded %d task(s)", len(store))
    return store


def save_tasks(kv: KeyValueStore, store: TaskStore) -> bool:
    try:
        kv.save(TODOS_KEY, encode_tasks(store))
        return True
    except Exception:
        logger.exception("Failed to save task list.")
        return False


def load_dark_mode(kv: KeyValueStore) -> bool:
    try:
        raw = kv.load(DARK_MODE_KEY)
    except Exception:
        logger.exception("Failed to read %r.", DARK_MODE_KEY)
        return False
    if raw is None:
        return False
    try:
        value = json.loads(raw)
    except (ValueError, RecursionError):
        logger.warning("Saved display mode is not valid JSON; using default.")
        return False
    return value if isinstance(value, bool) else False


def save_dark_mode(kv: KeyValueStore, value: bool) -> bool:
    try:
        kv.save(DARK_MODE_KEY, json.dumps(bool(value)))
        return True
    except Exception:
        logger.exception("Failed to save display mode.")
        return False


def attach_autosave(state: AppState) -> Callable[[], None]:
    """Save "todos" after every task mutation. Returns the unsubscribe callable."""

    def _on_change(kind: EventKind, payload: object) -> None:
        save_tasks(state.kv, state.tasks)

    return state.bus.subscribe(EventKind.TASKS_CHANGED, _on_change)
