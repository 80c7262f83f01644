# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "POCKET_APP_NAME": "App display name (default: pocket-tasks).",
    "POCKET_LOG_LEVEL": "Console logging level (default: INFO; the log file always gets DEBUG).",
    # Connectors
    "POCKET_CONSOLE_ENABLED": "Run the interactive console (true/false). Off = reminders only.",
    # Paths (gitignored)
    "POCKET_DATA_DIR": "Local data directory (default: .local/pocket-tasks).",
    "POCKET_STORAGE_DIR": "Key/value storage directory (default: <data_dir>/storage).",
    # Storage keys
    "POCKET_TASKS_KEY": "Storage key for the task list (default: tasks).",
    "POCKET_THEME_KEY": "Storage key for the theme (default: THEME).",
    "POCKET_WALLPAPER_KEY": "Storage key for the wallpaper (default: WALLPAPER).",
    # Appearance
    "POCKET_DEFAULT_THEME": "Theme used when none is stored: light | dark (default: light).",
    # Reminders
    "POCKET_NOTIFICATIONS_ENABLED": "Allow reminders (true/false). False behaves like a denied permission.",
    "POCKET_REMINDER_INTERVAL_SECONDS": "How often the reminder loop checks for due reminders (default: 5).",
}
