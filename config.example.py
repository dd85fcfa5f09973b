# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "FOCUS_APP_NAME": "App display name (default: focus).",
    "FOCUS_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors / collaborators
    "FOCUS_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    "FOCUS_SOUND": "Ring the terminal bell on task/timer events (true/false, default: true).",
    # Focus timer
    "FOCUS_SESSION_MINUTES": "Focus session length in minutes (default: 25, minimum 1).",
    "FOCUS_TICK_SECONDS": "Seconds per timer tick (default: 1.0; lower only for demos).",
    # Paths (gitignored)
    "FOCUS_DATA_DIR": "Local data directory for the state DB and focus.log (default: .local/focus).",
    "FOCUS_STATE_DB_PATH": (
        "Key-value SQLite path (default: <data_dir>/state.sqlite3); ':memory:' disables persistence."
    ),
}
