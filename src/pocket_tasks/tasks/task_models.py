# src/pocket_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any


class RepeatMode(StrEnum):
    """How often a task reminder repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"

    @classmethod
    def from_raw(cls, raw: Any) -> RepeatMode:
        if not raw or not isinstance(raw, str):
            return cls.NONE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.NONE


def to_local_naive(dt: datetime) -> datetime:
    """Due dates are kept as naive local time."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def _parse_due(raw: Any) -> datetime | None:
    if not raw or not isinstance(raw, str):
        return None
    try:
        return to_local_naive(datetime.fromisoformat(raw))
    except ValueError:
        return None


@dataclass(slots=True)
class Task:
    id: str
    text: str
    category: str | None = None
    important: bool = False
    due_at: datetime | None = None
    repeat: RepeatMode = RepeatMode.NONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "category": self.category,
            "important": self.important,
            "due": self.due_at.isoformat() if self.due_at is not None else None,
            "repeat": self.repeat.value,
        }

    @classmethod
    def from_raw(cls, raw: Any, index: int) -> Task | None:
        """
        Build a Task from one stored record.

        Accepts the object records written by this app and the bare strings the
        browser page used to store. Records without usable text are dropped.
        """
        if isinstance(raw, str):
            text = raw.strip()
            if not text:
                return None
            return cls(id=f"legacy-{index}", text=text)

        if not isinstance(raw, dict):
            return None

        text = str(raw.get("text") or "").strip()
        if not text:
            return None

        task_id = str(raw.get("id") or "").strip() or f"legacy-{index}"
        category = str(raw.get("category") or "").strip() or None

        return cls(
            id=task_id,
            text=text,
            category=category,
            important=raw.get("important") is True,
            due_at=_parse_due(raw.get("due")),
            repeat=RepeatMode.from_raw(raw.get("repeat")),
        )
