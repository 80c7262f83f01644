# src/pocket_tasks/notifications/triggers.py

"""
Reminder trigger descriptors.

A trigger only says *when* a reminder fires; the scheduler asks
next_fire_time() and keeps the resulting datetime. All datetimes are naive
local time, like the due dates the user types in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..tasks.task_models import RepeatMode

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(slots=True, frozen=True)
class DateTrigger:
    at: datetime


@dataclass(slots=True, frozen=True)
class DailyTrigger:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        _check_time(self.hour, self.minute)


@dataclass(slots=True, frozen=True)
class WeeklyTrigger:
    weekday: int  # 0=Monday .. 6=Sunday
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise ValueError(f"weekday out of range: {self.weekday}")
        _check_time(self.hour, self.minute)


Trigger = DateTrigger | DailyTrigger | WeeklyTrigger


def _check_time(hour: int, minute: int) -> None:
    if not 0 <= hour <= 23:
        raise ValueError(f"hour out of range: {hour}")
    if not 0 <= minute <= 59:
        raise ValueError(f"minute out of range: {minute}")


def build_trigger(due_at: datetime, repeat: RepeatMode) -> Trigger:
    if repeat == RepeatMode.DAILY:
        return DailyTrigger(hour=due_at.hour, minute=due_at.minute)
    if repeat == RepeatMode.WEEKLY:
        return WeeklyTrigger(weekday=due_at.weekday(), hour=due_at.hour, minute=due_at.minute)
    return DateTrigger(at=due_at)


def next_fire_time(trigger: Trigger, after: datetime) -> datetime | None:
    """Next datetime strictly after `after`, or None if a one-shot trigger has passed."""
    if isinstance(trigger, DateTrigger):
        return trigger.at if trigger.at > after else None

    candidate = after.replace(hour=trigger.hour, minute=trigger.minute, second=0, microsecond=0)

    if isinstance(trigger, DailyTrigger):
        if candidate <= after:
            candidate += timedelta(days=1)
        return candidate

    candidate += timedelta(days=(trigger.weekday - after.weekday()) % 7)
    if candidate <= after:
        candidate += timedelta(days=7)
    return candidate


def describe_trigger(trigger: Trigger) -> str:
    if isinstance(trigger, DateTrigger):
        return f"once at {trigger.at:%Y-%m-%d %H:%M}"
    if isinstance(trigger, DailyTrigger):
        return f"daily at {trigger.hour:02d}:{trigger.minute:02d}"
    return f"every {WEEKDAY_NAMES[trigger.weekday]} at {trigger.hour:02d}:{trigger.minute:02d}"
