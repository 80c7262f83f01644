# src/pocket_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/tasks/appearance/reminders).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..notifications.notifier import ConsoleNotifier
from ..notifications.reminder_api import restore_reminders
from ..notifications.reminder_scheduler import ReminderScheduler
from ..preferences.appearance import AppearanceStore, Theme
from ..storage.local_storage import LocalStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = LocalStorage(settings.storage_dir)

    state = AppState(
        settings=settings,
        task_store=TaskStore(storage, key=settings.tasks_key),
        appearance=AppearanceStore(
            storage,
            theme_key=settings.theme_key,
            wallpaper_key=settings.wallpaper_key,
            default_theme=Theme.from_raw(settings.default_theme),
        ),
        reminders=ReminderScheduler(),
        notifier=ConsoleNotifier(enabled=settings.notifications_enabled),
    )

    restore_reminders(state)
    return state
