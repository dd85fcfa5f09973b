# src/focus_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Unparsable values fall back to defaults instead of failing at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "FOCUS"

DEFAULT_SESSION_MINUTES = 25


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connectors / collaborators ----
    console_enabled: bool
    sound_enabled: bool

    # ---- Focus timer ----
    session_minutes: int
    tick_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    state_db_path: Path

    @property
    def in_memory(self) -> bool:
        return str(self.state_db_path) == ":memory:"

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "focus").strip() or "focus"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        sound_enabled = _env_bool(_k("SOUND"), True)

        session_minutes = max(1, _env_int(_k("SESSION_MINUTES"), DEFAULT_SESSION_MINUTES))
        tick_seconds = _env_float(_k("TICK_SECONDS"), 1.0)
        if tick_seconds <= 0:
            tick_seconds = 1.0

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/focus"))
        state_db_path = _env_path(_k("STATE_DB_PATH"), data_dir / "state.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            sound_enabled=sound_enabled,
            session_minutes=session_minutes,
            tick_seconds=tick_seconds,
            data_dir=data_dir,
            state_db_path=state_db_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    global _SETTINGS
    if _SETTINGS is None:
        load_dotenv(override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
