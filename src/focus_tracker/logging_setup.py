# src/focus_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "focus.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Minimum console level per logger prefix; the first matching prefix wins.
# The ticker runs on its own thread, so its records would land in the middle of the prompt.
CONSOLE_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("focus_tracker.timer.", logging.WARNING),
    ("focus_tracker.", logging.NOTSET),
    ("py.warnings", logging.ERROR),
)
FOREIGN_THRESHOLD = logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """Drop console records below the threshold configured for their logger prefix."""

    def __init__(
        self,
        thresholds: tuple[tuple[str, int], ...] = CONSOLE_THRESHOLDS,
        default: int = FOREIGN_THRESHOLD,
    ) -> None:
        super().__init__()
        self._thresholds = thresholds
        self._default = default

    def threshold_for(self, name: str) -> int:
        for prefix, level in self._thresholds:
            if name.startswith(prefix):
                return level
        return self._default

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold_for(record.name)


def _console_handler(level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.addFilter(_ConsoleNoiseFilter())
    return handler


def _file_handler(path: Path, level: int, fmt: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/focus",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logging to stderr (filtered, so the REPL stays readable) and to
    <log_dir>/focus.log (unfiltered). Replaces any handlers already on the root logger.

    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    root.addHandler(_console_handler(console_level, fmt))
    root.addHandler(_file_handler(log_file, file_level, fmt))

    # warnings.warn(...) arrives as 'py.warnings'
    logging.captureWarnings(True)
    return log_file
