# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_tasks.core.state import AppState
from pocket_tasks.notifications.reminder_scheduler import ReminderScheduler
from pocket_tasks.preferences.appearance import AppearanceStore
from pocket_tasks.storage.local_storage import LocalStorage
from pocket_tasks.tasks.task_store import TaskStore

from .fakes import FakeNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="pocket-tasks-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        storage_dir=tmp_path / "data" / "storage",
        tasks_key="tasks",
        theme_key="THEME",
        wallpaper_key="WALLPAPER",
        default_theme="light",
        notifications_enabled=True,
        reminder_interval_seconds=0.01,
    )


@pytest.fixture()
def storage(settings: SimpleNamespace) -> LocalStorage:
    return LocalStorage(settings.storage_dir)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def state(settings: SimpleNamespace, storage: LocalStorage, notifier: FakeNotifier) -> AppState:
    """
    AppState wired with a fake notifier.

    NOTE: storage is the real file-backed LocalStorage (under tmp_path),
    because persistence is part of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=TaskStore(storage, key=settings.tasks_key),
        appearance=AppearanceStore(storage, theme_key=settings.theme_key, wallpaper_key=settings.wallpaper_key),
        reminders=ReminderScheduler(),
        notifier=notifier,
    )
