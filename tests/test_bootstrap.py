# tests/test_bootstrap.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

from pocket_tasks.cli.bootstrap import create_initial_state
from pocket_tasks.notifications.notifier import ConsoleNotifier
from pocket_tasks.preferences.appearance import Theme


def test_state_survives_restart(settings) -> None:
    state = create_initial_state(settings=settings)
    assert settings.storage_dir.is_dir()
    assert state.task_store.count_tasks() == 0

    due = datetime.now() + timedelta(days=2)
    state.task_store.add_task("renew passport", due_at=due)
    state.appearance.toggle_theme()

    again = create_initial_state(settings=settings)
    assert again.task_store.list_tasks() == state.task_store.list_tasks()
    assert again.appearance.theme == Theme.DARK
    assert [r.body for r in again.reminders.pending()] == ["renew passport"]


def test_console_notifier_permission_and_output() -> None:
    lines: list[str] = []
    notifier = ConsoleNotifier(enabled=True, emit=lines.append)
    assert notifier.request_permission() is True

    asyncio.run(notifier.notify(title="Task reminder", body="stretch"))
    assert len(lines) == 1
    assert "[REMINDER] Task reminder: stretch" in lines[0]

    assert ConsoleNotifier(enabled=False).request_permission() is False
