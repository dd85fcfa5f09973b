# src/focus_tracker/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskStore
from ..timer.focus_timer import FocusTimer
from .events import EventBus
from .ports import KeyValueStore, Notifier


@dataclass
class AppState:
    """
    Everything a connector needs, passed explicitly (no module-level engine state).

    `lock` is the single mutual-exclusion boundary for the engine: the ticker
    thread and command handlers hold it while touching tasks/timer.
    """

    settings: Any
    bus: EventBus
    tasks: TaskStore
    timer: FocusTimer
    kv: KeyValueStore
    notifier: Notifier

    dark_mode: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock)
