# src/pocket_tasks/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..notifications.reminder_scheduler import ReminderScheduler
from ..preferences.appearance import AppearanceStore
from ..tasks.task_store import TaskStore
from .ports import Notifier


@dataclass
class AppState:
    # Settings live on the state so commands/connectors don't read global config.
    settings: Any

    task_store: TaskStore
    appearance: AppearanceStore
    reminders: ReminderScheduler
    notifier: Notifier

    # Guards task_store/appearance between the console thread and background work.
    lock: threading.RLock = field(default_factory=threading.RLock)
