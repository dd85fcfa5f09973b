# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from focus_tracker.cli.bootstrap import create_initial_state
from focus_tracker.core.events import EventBus
from focus_tracker.core.state import AppState
from focus_tracker.tasks.task_store import TaskStore
from focus_tracker.timer.focus_timer import FocusTimer

from .fakes import EventRecorder, FakeKeyValueStore, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="focus-test",
        log_level="DEBUG",
        console_enabled=False,
        sound_enabled=False,
        session_minutes=25,
        tick_seconds=0.01,
        data_dir=tmp_path,
        state_db_path=tmp_path / "state.sqlite3",
        in_memory=False,
    )


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture()
def store(bus: EventBus) -> TaskStore:
    return TaskStore(bus)


@pytest.fixture()
def timer(bus: EventBus) -> FocusTimer:
    return FocusTimer(bus)


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def state(settings: SimpleNamespace, kv: FakeKeyValueStore, notifier: RecordingNotifier) -> AppState:
    """AppState wired through the real composition root, with fake collaborators."""
    return create_initial_state(settings=settings, kv=kv, notifier=notifier)
