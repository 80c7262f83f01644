# src/pocket_tasks/notifications/reminder_api.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.state import AppState
from ..tasks.task_models import Task
from .reminder_scheduler import ScheduledReminder
from .triggers import build_trigger

logger = logging.getLogger(__name__)

REMINDER_TITLE = "Task reminder"


class NotificationPermissionError(RuntimeError):
    """The notifier refused permission to show reminders."""


def _reminder_body(task: Task) -> str:
    return f"! {task.text}" if task.important else task.text


def schedule_task_reminder(
    state: AppState, task: Task, *, now: datetime | None = None
) -> ScheduledReminder | None:
    """
    Schedule the reminder for a task with a due date.

    Returns None for tasks without a due date or whose one-shot time has passed.
    Raises NotificationPermissionError if notifications are not allowed.
    """
    if task.due_at is None:
        return None

    if not state.notifier.request_permission():
        raise NotificationPermissionError("Notification permission was not granted.")

    return state.reminders.schedule(
        task.id,
        title=REMINDER_TITLE,
        body=_reminder_body(task),
        trigger=build_trigger(task.due_at, task.repeat),
        now=now,
    )


def cancel_task_reminder(state: AppState, task_id: str) -> bool:
    return state.reminders.cancel(task_id)


def restore_reminders(state: AppState, *, now: datetime | None = None) -> int:
    """Re-create reminders for persisted tasks (the schedule itself lives in memory)."""
    tasks = [t for t in state.task_store.list_tasks() if t.due_at is not None]
    if not tasks:
        return 0

    if not state.notifier.request_permission():
        logger.warning("Notifications not permitted; %d reminder(s) not restored.", len(tasks))
        return 0

    n = 0
    for task in tasks:
        if state.reminders.schedule(
            task.id,
            title=REMINDER_TITLE,
            body=_reminder_body(task),
            trigger=build_trigger(task.due_at, task.repeat),
            now=now,
        ):
            n += 1
    logger.info("Restored %d reminder(s) from %d dated task(s)", n, len(tasks))
    return n
