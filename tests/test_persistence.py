# tests/test_persistence.py

from __future__ import annotations

import json
from pathlib import Path

from focus_tracker.cli.bootstrap import create_initial_state
from focus_tracker.core.events import EventBus
from focus_tracker.storage.kv_store import MemoryKeyValueStore, SqliteKeyValueStore
from focus_tracker.storage.persistence import (
    DARK_MODE_KEY,
    TODOS_KEY,
    decode_tasks,
    load_dark_mode,
    load_tasks,
    save_dark_mode,
)

from .fakes import FakeKeyValueStore


def test_sqlite_kv_roundtrip_and_overwrite(tmp_path: Path) -> None:
    kv = SqliteKeyValueStore(tmp_path / "nested" / "state.sqlite3")
    assert kv.load("todos") is None

    kv.save("todos", "[]")
    kv.save("todos", '[{"id": 1}]')
    kv.save("darkMode", "true")

    reopened = SqliteKeyValueStore(tmp_path / "nested" / "state.sqlite3")
    assert reopened.load("todos") == '[{"id": 1}]'
    assert reopened.keys() == ["darkMode", "todos"]

    reopened.delete("todos")
    assert reopened.load("todos") is None


def test_memory_kv_store() -> None:
    kv = MemoryKeyValueStore({"a": "1"})
    kv.save("b", "2")
    assert kv.load("a") == "1"
    assert kv.keys() == ["a", "b"]
    kv.delete("a")
    assert kv.load("a") is None


def test_missing_or_corrupt_state_starts_empty() -> None:
    assert len(load_tasks(FakeKeyValueStore())) == 0
    assert len(load_tasks(FakeKeyValueStore({TODOS_KEY: "{not json"}))) == 0
    assert len(load_tasks(FakeKeyValueStore({TODOS_KEY: '{"id": 1}'}))) == 0

    failing = FakeKeyValueStore()
    failing.fail_load = True
    assert len(load_tasks(failing)) == 0
    assert load_dark_mode(failing) is False


def test_deeply_nested_state_starts_empty() -> None:
    nested = "[" * 100_000 + "]" * 100_000
    assert decode_tasks(nested) == []
    assert len(load_tasks(FakeKeyValueStore({TODOS_KEY: nested}))) == 0
    assert load_dark_mode(FakeKeyValueStore({DARK_MODE_KEY: nested})) is False


def test_decode_tasks_drops_non_objects() -> None:
    assert decode_tasks('[1, "x", {"text": "ok"}, null]') == [{"text": "ok"}]
    assert decode_tasks(None) == []


def test_dark_mode_roundtrip_and_defaults() -> None:
    kv = FakeKeyValueStore()
    assert load_dark_mode(kv) is False

    assert save_dark_mode(kv, True) is True
    assert kv.data[DARK_MODE_KEY] == "true"
    assert load_dark_mode(kv) is True

    assert load_dark_mode(FakeKeyValueStore({DARK_MODE_KEY: '"yes"'})) is False
    assert load_dark_mode(FakeKeyValueStore({DARK_MODE_KEY: "oops"})) is False


def test_every_mutation_is_autosaved(state, kv: FakeKeyValueStore) -> None:
    task = state.tasks.add("Buy milk", "2026-10-20")
    assert kv.saves[TODOS_KEY] == 1
    saved = json.loads(kv.data[TODOS_KEY])
    assert saved[0]["text"] == "Buy milk"
    assert saved[0]["dueDate"] == "2026-10-20"
    assert saved[0]["dueTime"] is None

    state.tasks.toggle(task.id)
    state.tasks.toggle(task.id)
    state.tasks.toggle(task.id)
    state.tasks.clear_completed()
    assert kv.saves[TODOS_KEY] == 5
    assert json.loads(kv.data[TODOS_KEY]) == []

    # no-ops do not write
    state.tasks.add("   ")
    state.tasks.delete(task.id)
    state.tasks.clear_completed()
    assert kv.saves[TODOS_KEY] == 5


def test_save_failure_keeps_memory_state(state, kv: FakeKeyValueStore) -> None:
    kv.fail_save = True
    task = state.tasks.add("still here")
    assert state.tasks.get(task.id) == task
    assert TODOS_KEY not in kv.data


def test_state_survives_restart(settings, tmp_path: Path, notifier) -> None:
    kv = SqliteKeyValueStore(tmp_path / "state.sqlite3")
    first = create_initial_state(settings=settings, kv=kv, notifier=notifier)
    a = first.tasks.add("first")
    b = first.tasks.add("second", "2026-01-02", "10:15")
    first.tasks.toggle(a.id)
    save_dark_mode(kv, True)

    second = create_initial_state(
        settings=settings, kv=SqliteKeyValueStore(tmp_path / "state.sqlite3"), notifier=notifier
    )

    assert second.tasks.list_tasks() == first.tasks.list_tasks()
    assert second.dark_mode is True
    assert second.tasks.get(b.id).due_time.strftime("%H:%M") == "10:15"
    assert second.tasks.add("third").id > b.id


def test_load_tasks_attaches_bus() -> None:
    bus = EventBus()
    kv = FakeKeyValueStore({TODOS_KEY: '[{"id": 3, "text": "a"}]'})
    store = load_tasks(kv, bus)
    assert store.bus is bus
    assert store.get(3).text == "a"
