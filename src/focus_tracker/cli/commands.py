# src/focus_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..storage.persistence import save_dark_mode
from ..tasks.task_models import Task, TaskStats
from ..tasks.task_store import is_overdue

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, /timer, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Plain text (no leading /) adds a task.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering helpers ----

def render_task(task: Task, now: datetime | None = None) -> str:
    mark = "x" if task.completed else " "
    line = f"{task.id:>4}. [{mark}] {task.text}"

    due_parts: list[str] = []
    if task.due_date is not None:
        due_parts.append(task.due_date.isoformat())
    if task.due_time is not None:
        due_parts.append(task.due_time.strftime("%H:%M"))
    if due_parts:
        line += f"  (due {' '.join(due_parts)})"
    if is_overdue(task, now):
        line += "  OVERDUE"
    return line


def render_stats(stats: TaskStats) -> str:
    return (
        f"Total: {stats.total}  Completed: {stats.completed}  "
        f"Remaining: {stats.remaining}  Overdue: {stats.overdue}"
    )


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    raw = args[0].strip().rstrip(".")
    return int(raw) if raw.isascii() and raw.isdigit() else None


def split_due_tokens(args: list[str]) -> tuple[str, str | None, str | None]:
    """
    Peel trailing @YYYY-MM-DD / @HH:MM tokens off an /add line.

    Returns (text, due_date, due_time) with the raw (unvalidated) strings.
    """
    words = list(args)
    due_date: str | None = None
    due_time: str | None = None
    while words and words[-1].startswith("@") and len(words[-1]) > 1:
        token = words[-1][1:]
        if ":" in token and due_time is None:
            due_time = token
        elif "-" in token and due_date is None:
            due_date = token
        else:
            break
        words.pop()
    return " ".join(words), due_date, due_time


# ---- task commands ----

def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    snap = state.timer.snapshot()
    storage = "in-memory" if getattr(settings, "in_memory", False) else str(getattr(settings, "state_db_path", "?"))
    return (
        "Status:\n"
        f"  Tasks: {len(state.tasks)}\n"
        f"  Timer: {snap.clock} ({'running' if snap.running else 'paused'}), "
        f"session {snap.session_minutes} min\n"
        f"  Display mode: {'dark' if state.dark_mode else 'light'}\n"
        f"  Storage: {storage}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    text, due_date, due_time = split_due_tokens(args)
    if not text.strip():
        return "Usage: /add <text> [@YYYY-MM-DD] [@HH:MM]"
    try:
        result = state.tasks.add(text, due_date, due_time)
    except ValueError:
        return "Invalid due date/time. Use @YYYY-MM-DD and @HH:MM."
    if not result:
        return "Nothing to add."
    task = cast(Task, result)
    return f"Added: {render_task(task)}"


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.tasks.list_tasks()
    if not tasks:
        return "No tasks yet. Add one with /add <text>."
    now = datetime.now()
    lines = [render_task(t, now) for t in tasks]
    lines.append(render_stats(state.tasks.stats(now)))
    return "\n".join(lines)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    result = state.tasks.toggle(task_id)
    if not result:
        return f"Task {task_id} not found."
    task = cast(Task, result)
    return f"{'Completed' if task.completed else 'Reopened'}: {task.text}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    result = state.tasks.delete(task_id)
    if not result:
        return f"Task {task_id} not found."
    return f"Deleted: {cast(Task, result).text}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = state.tasks.clear_completed()
    if removed == 0:
        return "No completed tasks to clear."
    return f"Cleared {removed} completed task(s)."


def cmd_stats(state: AppState, args: list[str]) -> str:
    return render_stats(state.tasks.stats())


# ---- timer / display ----

def cmd_timer(state: AppState, args: list[str]) -> str:
    """
    /timer            -> show clock
    /timer start      -> start (or resume) the countdown
    /timer pause      -> pause
    /timer toggle     -> start/pause
    /timer reset      -> stop and restore the session length
    """
    timer = state.timer
    sub = args[0].lower() if args else "status"

    if sub in ("status", "show"):
        pass
    elif sub in ("start", "resume", "go"):
        if not timer.start():
            return f"Timer already running ({timer.snapshot().clock})."
    elif sub in ("pause", "stop"):
        if not timer.pause():
            return f"Timer already paused ({timer.snapshot().clock})."
    elif sub == "toggle":
        timer.toggle()
    elif sub == "reset":
        timer.reset()
    else:
        return "Usage: /timer [start|pause|toggle|reset|status]"

    snap = timer.snapshot()
    return f"Timer {snap.clock} {'running' if snap.running else 'paused'}."


def cmd_dark(state: AppState, args: list[str]) -> str:
    """
    /dark         -> show display mode
    /dark on|off  -> set it
    /dark toggle  -> flip it
    """
    if not args:
        return f"Dark mode is {'ON' if state.dark_mode else 'OFF'}. Use /dark on|off|toggle."

    arg = args[0].lower()
    if arg in ("on", "1", "true", "yes"):
        value = True
    elif arg in ("off", "0", "false", "no"):
        value = False
    elif arg == "toggle":
        value = not state.dark_mode
    else:
        return "Usage: /dark on | /dark off | /dark toggle"

    state.dark_mode = value
    logger.debug("Display mode set dark=%s", value)
    save_dark_mode(state.kv, value)
    return f"Dark mode {'ON' if value else 'OFF'}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show timer, display mode and storage.")
registry.register(
    "add", cmd_add, help_text="Add a task: /add <text> [@YYYY-MM-DD] [@HH:MM].", aliases=["a"]
)
registry.register("list", cmd_list, help_text="List tasks, newest first.", aliases=["ls"])
registry.register(
    "done", cmd_toggle, help_text="Toggle a task complete/incomplete: /done <id>.", aliases=["toggle", "t"]
)
registry.register("rm", cmd_delete, help_text="Delete a task: /rm <id>.", aliases=["del", "delete"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("stats", cmd_stats, help_text="Show total/completed/remaining/overdue counts.")
registry.register(
    "timer", cmd_timer, help_text="Focus timer: /timer start | pause | toggle | reset."
)
registry.register("dark", cmd_dark, help_text="Display mode: /dark on | off | toggle.")
