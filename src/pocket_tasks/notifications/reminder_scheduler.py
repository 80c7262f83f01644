# src/pocket_tasks/notifications/reminder_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small in-memory schedule plus a polling loop that:
- pops reminders whose fire time has come,
- reschedules recurring ones (daily/weekly), drops one-shot ones,
- delivers them through an injected Notifier port.

Delivery is fire-and-forget: a failed notify() is logged and not retried.
"""

import asyncio
import contextlib
import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime

from ..core.ports import Notifier
from .triggers import DateTrigger, Trigger, next_fire_time

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ScheduledReminder:
    id: str
    title: str
    body: str
    trigger: Trigger
    next_fire_at: datetime

    @property
    def recurring(self) -> bool:
        return not isinstance(self.trigger, DateTrigger)


class ReminderScheduler:
    """
    Thread-safe reminder schedule.

    The console thread schedules/cancels; the background loop pops due items.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, ScheduledReminder] = {}

    def schedule(
        self,
        reminder_id: str,
        *,
        title: str,
        body: str,
        trigger: Trigger,
        now: datetime | None = None,
    ) -> ScheduledReminder | None:
        """
        Schedule (or replace) a reminder.

        Returns None when the trigger never fires again (one-shot in the past).
        """
        now = now or datetime.now()
        fire_at = next_fire_time(trigger, now)
        if fire_at is None:
            logger.info("Reminder %s not scheduled: trigger already passed", reminder_id)
            with self._lock:
                self._items.pop(reminder_id, None)
            return None

        item = ScheduledReminder(id=reminder_id, title=title, body=body, trigger=trigger, next_fire_at=fire_at)
        with self._lock:
            self._items[reminder_id] = item
        logger.info("Reminder %s scheduled for %s", reminder_id, fire_at.isoformat(timespec="minutes"))
        return item

    def cancel(self, reminder_id: str) -> bool:
        with self._lock:
            removed = self._items.pop(reminder_id, None)
        if removed is not None:
            logger.info("Reminder %s cancelled", reminder_id)
        return removed is not None

    def cancel_all(self) -> int:
        with self._lock:
            n = len(self._items)
            self._items.clear()
        return n

    def get(self, reminder_id: str) -> ScheduledReminder | None:
        with self._lock:
            return self._items.get(reminder_id)

    def pending(self) -> list[ScheduledReminder]:
        with self._lock:
            items = list(self._items.values())
        items.sort(key=lambda r: (r.next_fire_at, r.id))
        return items

    def pop_due(self, now: datetime) -> list[ScheduledReminder]:
        """
        Return reminders due at `now` (next_fire_at <= now), oldest first.

        Recurring reminders move to their next fire time; one-shot reminders
        are removed from the schedule.
        """
        due: list[ScheduledReminder] = []
        with self._lock:
            for rid, item in list(self._items.items()):
                if item.next_fire_at > now:
                    continue
                due.append(item)
                nxt = next_fire_time(item.trigger, now) if item.recurring else None
                if nxt is None:
                    del self._items[rid]
                else:
                    self._items[rid] = replace(item, next_fire_at=nxt)
        due.sort(key=lambda r: (r.next_fire_at, r.id))
        return due


async def run_reminder_loop(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        *,
        interval_seconds: float = 5.0,
) -> None:
    """
    Simple polling loop.

    Every interval_seconds:
    - pop due reminders from the scheduler
    - deliver each via notifier.notify(title=..., body=...)

    To stop the loop, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        now = datetime.now()

        try:
            due = scheduler.pop_due(now)
        except Exception:
            logger.exception("pop_due failed")
            due = []

        for item in due:
            try:
                await notifier.notify(title=item.title, body=item.body)
                logger.info("Reminder %s delivered", item.id)
            except Exception:
                logger.exception("Reminder delivery failed id=%s", item.id)

        await asyncio.sleep(sleep_s)


@dataclass
class ReminderBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Reminder loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_until_stopped(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        stop_event: asyncio.Event,
        interval_seconds: float,
) -> None:
    loop_task = asyncio.create_task(
        run_reminder_loop(scheduler, notifier, interval_seconds=interval_seconds)
    )
    try:
        await stop_event.wait()
    finally:
        loop_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await loop_task
        logger.info("Reminder loop stopped.")


def start_reminders_in_background(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        *,
        interval_seconds: float = 5.0,
) -> ReminderBackgroundRunner | None:
    """
    Start the reminder loop in a background thread (so console REPL can run in parallel).

    The console REPL blocks on input(); the loop is async and wants its own event loop.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(_run_until_stopped(scheduler, notifier, stop_event, interval_seconds))
        except Exception:
            logger.exception("Reminder thread crashed.")
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="reminders", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Reminder thread did not initialize properly.")
        return None

    logger.info("Reminder background thread started (interval=%.1fs).", interval_seconds)
    return ReminderBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
