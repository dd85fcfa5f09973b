# src/focus_tracker/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit", "/q")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def handle_line(state: AppState, line: str) -> str | None:
    """
    One REPL step: slash commands go to the registry, anything else is added
    as a task text. Runs under state.lock so the ticker never interleaves.
    """
    line = line.strip()
    if not line:
        return None
    if not line.startswith("/"):
        line = f"/add {line}"

    try:
        with state.lock:
            return command_registry.handle(state, line, emit=_print_ts)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


def _prompt(state: AppState) -> str:
    with state.lock:
        snap = state.timer.snapshot()
    marker = ">" if snap.running else "||"
    return f"[{snap.clock} {marker}] > "


def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "focus"))
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands, /exit to quit.")

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
