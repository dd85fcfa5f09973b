# src/focus_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the timer ticker in a background thread,
- the console REPL in the main thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..storage.persistence import save_dark_mode, save_tasks
from ..timer.ticker import TickerBackgroundRunner, start_ticker_in_background

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Final save; autosave already ran on each mutation, this covers anything missed."""
    with state.lock:
        save_tasks(state.kv, state.tasks)
        save_dark_mode(state.kv, state.dark_mode)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    ticker: TickerBackgroundRunner | None = start_ticker_in_background(state)

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Not available on every platform / outside the main thread.
        pass

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Timer ticking in background. Press Ctrl+C to stop.")
            try:
                stop_main.wait()
            except KeyboardInterrupt:
                pass
    finally:
        if ticker is not None:
            ticker.stop()
            ticker.join(timeout=5.0)

        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
