# tests/test_triggers.py

from __future__ import annotations

from datetime import datetime

import pytest

from pocket_tasks.notifications.triggers import (
    DailyTrigger,
    DateTrigger,
    WeeklyTrigger,
    build_trigger,
    describe_trigger,
    next_fire_time,
)
from pocket_tasks.tasks.task_models import RepeatMode

# 2026-10-14 is a Wednesday.
WED_NOON = datetime(2026, 10, 14, 12, 0)


def test_build_trigger_per_repeat_mode() -> None:
    due = datetime(2026, 10, 16, 8, 15)  # Friday
    assert build_trigger(due, RepeatMode.NONE) == DateTrigger(at=due)
    assert build_trigger(due, RepeatMode.DAILY) == DailyTrigger(hour=8, minute=15)
    assert build_trigger(due, RepeatMode.WEEKLY) == WeeklyTrigger(weekday=4, hour=8, minute=15)


def test_date_trigger_fires_once() -> None:
    at = datetime(2026, 10, 14, 13, 0)
    assert next_fire_time(DateTrigger(at=at), WED_NOON) == at
    assert next_fire_time(DateTrigger(at=at), at) is None


def test_daily_trigger_rolls_to_tomorrow() -> None:
    assert next_fire_time(DailyTrigger(hour=18, minute=0), WED_NOON) == datetime(2026, 10, 14, 18, 0)
    assert next_fire_time(DailyTrigger(hour=12, minute=0), WED_NOON) == datetime(2026, 10, 15, 12, 0)


def test_weekly_trigger() -> None:
    assert next_fire_time(WeeklyTrigger(weekday=4, hour=9, minute=0), WED_NOON) == datetime(2026, 10, 16, 9, 0)
    assert next_fire_time(WeeklyTrigger(weekday=2, hour=12, minute=0), WED_NOON) == datetime(2026, 10, 21, 12, 0)
    assert next_fire_time(WeeklyTrigger(weekday=0, hour=8, minute=30), WED_NOON) == datetime(2026, 10, 19, 8, 30)


def test_invalid_trigger_fields() -> None:
    with pytest.raises(ValueError):
        DailyTrigger(hour=24, minute=0)
    with pytest.raises(ValueError):
        WeeklyTrigger(weekday=7, hour=0, minute=0)


def test_describe_trigger() -> None:
    assert describe_trigger(DailyTrigger(hour=7, minute=5)) == "daily at 07:05"
    assert describe_trigger(WeeklyTrigger(weekday=6, hour=20, minute=0)) == "every Sunday at 20:00"
    assert describe_trigger(DateTrigger(at=WED_NOON)) == "once at 2026-10-14 12:00"
