# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from focus_tracker.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("focus_tracker.tasks.task_store", logging.DEBUG, True),
        ("focus_tracker.timer.ticker", logging.INFO, False),
        ("focus_tracker.timer.ticker", logging.WARNING, True),
        ("py.warnings", logging.WARNING, False),
        ("asyncio", logging.WARNING, False),
        ("asyncio", logging.ERROR, True),
    ],
)
def test_console_filter_thresholds(name: str, level: int, shown: bool) -> None:
    assert _ConsoleNoiseFilter().filter(_record(name, level)) is shown


def test_setup_logging_replaces_handlers_and_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        setup_logging(log_dir=tmp_path / "logs")
        assert len(root.handlers) == 2

        logging.getLogger("focus_tracker.timer.ticker").debug("tick due=1")
        for handler in root.handlers:
            handler.flush()

        assert log_file == tmp_path / "logs" / "focus.log"
        assert "tick due=1" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
