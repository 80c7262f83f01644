# src/pocket_tasks/notifications/notifier.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """
    Notifier that prints reminders into the terminal (with a bell).

    `enabled` plays the role of the OS notification permission.
    """

    def __init__(self, *, enabled: bool = True, emit: Callable[[str], None] | None = None) -> None:
        self.enabled = enabled
        self._emit = emit or (lambda text: print(text, flush=True))

    def request_permission(self) -> bool:
        if not self.enabled:
            logger.info("Notification permission denied (notifications disabled).")
        return self.enabled

    async def notify(self, *, title: str, body: str) -> None:
        ts = datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")
        self._emit(f"\a\n[{ts}] [REMINDER] {title}: {body}")
