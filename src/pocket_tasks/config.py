# src/pocket_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time: every variable has a default.
- Safe local overrides can live in a gitignored config_local.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

ENV_PREFIX = "POCKET"

load_dotenv(override=False)


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

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_dir: Path

    # ---- Storage keys ----
    tasks_key: str
    theme_key: str
    wallpaper_key: str

    # ---- Appearance ----
    default_theme: str

    # ---- Reminders ----
    notifications_enabled: bool
    reminder_interval_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "pocket-tasks").strip() or "pocket-tasks"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/pocket-tasks"))
        storage_dir = _env_path(_k("STORAGE_DIR"), data_dir / "storage")

        # The browser page used "tasks"; the mobile variants used "TASKS"/"THEME".
        tasks_key = _env(_k("TASKS_KEY"), "tasks").strip() or "tasks"
        theme_key = _env(_k("THEME_KEY"), "THEME").strip() or "THEME"
        wallpaper_key = _env(_k("WALLPAPER_KEY"), "WALLPAPER").strip() or "WALLPAPER"

        default_theme = _env(_k("DEFAULT_THEME"), "light").strip().lower() or "light"

        notifications_enabled = _env_bool(_k("NOTIFICATIONS_ENABLED"), True)
        reminder_interval_seconds = _env_float(_k("REMINDER_INTERVAL_SECONDS"), 5.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            storage_dir=storage_dir,
            tasks_key=tasks_key,
            theme_key=theme_key,
            wallpaper_key=wallpaper_key,
            default_theme=default_theme,
            notifications_enabled=notifications_enabled,
            reminder_interval_seconds=reminder_interval_seconds,
        )


def apply_local_overrides(settings: Settings, local: Any) -> Settings:
    """
    Apply safe overrides from a config_local module (or any object with the same attributes).

    A DATA_DIR override also moves storage_dir, unless POCKET_STORAGE_DIR pins it.
    """
    changes: dict[str, Any] = {}
    if hasattr(local, "CONSOLE_ENABLED"):
        changes["console_enabled"] = bool(local.CONSOLE_ENABLED)
    if hasattr(local, "NOTIFICATIONS_ENABLED"):
        changes["notifications_enabled"] = bool(local.NOTIFICATIONS_ENABLED)
    if hasattr(local, "DATA_DIR"):
        data_dir = Path(local.DATA_DIR).expanduser()
        changes["data_dir"] = data_dir
        if not _env(_k("STORAGE_DIR")).strip():
            changes["storage_dir"] = data_dir / "storage"
    return replace(settings, **changes) if changes else settings


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for a few explicit switches.
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    SETTINGS = apply_local_overrides(SETTINGS, _config_local)


def get_settings() -> Settings:
    return SETTINGS
