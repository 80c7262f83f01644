# src/pocket_tasks/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable
from datetime import datetime

from ..core.ports import KeyValueStorage
from .task_models import RepeatMode, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task list mirrored to a single storage key.

    Persistence model:
    - read the whole JSON array once, on construction
    - overwrite the whole value after every mutation

    A broken or missing value never raises: the store starts empty instead.
    """

    def __init__(self, storage: KeyValueStorage, key: str = "tasks") -> None:
        self._storage = storage
        self._key = key
        self._tasks: list[Task] = self._load()
        logger.info("TaskStore ready key=%s total=%d", self._key, len(self._tasks))

    # ---- low-level helpers ----

    def _load(self) -> list[Task]:
        try:
            raw = self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to read tasks key=%s; starting empty.", self._key)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Stored tasks are not valid JSON (key=%s); starting empty.", self._key)
            return []

        if not isinstance(data, list):
            logger.warning("Stored tasks are not a list (key=%s); starting empty.", self._key)
            return []

        out: list[Task] = []
        seen: set[str] = set()
        for i, item in enumerate(data):
            task = Task.from_raw(item, i)
            if task is None:
                logger.debug("Dropping unusable task record #%d", i)
                continue
            if task.id in seen:
                logger.warning("Dropping duplicate task id=%s", task.id)
                continue
            seen.add(task.id)
            out.append(task)
        return out

    def _new_id(self, now: float | None) -> str:
        ts = int((time.time() if now is None else now) * 1000)
        taken = {t.id for t in self._tasks}
        while str(ts) in taken:
            ts += 1
        return str(ts)

    def _commit(self, tasks: list[Task]) -> None:
        """Swap in the new list and persist it; the old list stays if the write fails."""
        previous = self._tasks
        self._tasks = tasks
        try:
            self.save()
        except Exception:
            self._tasks = previous
            logger.exception("Failed to save tasks key=%s; change rolled back.", self._key)
            raise

    # ---- public API ----

    def save(self) -> None:
        payload = json.dumps([t.to_dict() for t in self._tasks], ensure_ascii=False)
        self._storage.set_item(self._key, payload)
        logger.debug("Tasks saved key=%s total=%d", self._key, len(self._tasks))

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get_task(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def list_tasks(self, *, category: str | None = None, important_only: bool = False) -> list[Task]:
        """Tasks in insertion order, optionally filtered by category and/or importance."""
        cat = category.strip().lower() if category else None
        out: list[Task] = []
        for t in self._tasks:
            if cat is not None and (t.category or "").lower() != cat:
                continue
            if important_only and not t.important:
                continue
            out.append(t)
        return out

    def categories(self) -> list[str]:
        out: list[str] = []
        for t in self._tasks:
            if t.category and t.category not in out:
                out.append(t.category)
        return out

    def add_task(
        self,
        text: str,
        *,
        category: str | None = None,
        important: bool = False,
        due_at: datetime | None = None,
        repeat: RepeatMode = RepeatMode.NONE,
        now: float | None = None,
    ) -> Task:
        text = (text or "").strip()
        if not text:
            raise ValueError("text is required")

        task = Task(
            id=self._new_id(now),
            text=text,
            category=(category or "").strip() or None,
            important=bool(important),
            due_at=due_at,
            repeat=repeat,
        )
        self._commit([*self._tasks, task])
        logger.debug("Task added id=%s category=%s due_at=%s repeat=%s", task.id, task.category, due_at, repeat.value)
        return task

    def remove_task(self, task_id: str) -> Task | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                self._commit(self._tasks[:i] + self._tasks[i + 1 :])
                logger.debug("Task removed id=%s", task_id)
                return t
        return None

    def remove_at(self, index: int) -> Task | None:
        if index < 0 or index >= len(self._tasks):
            return None
        task = self._tasks[index]
        self._commit(self._tasks[:index] + self._tasks[index + 1 :])
        logger.debug("Task removed index=%d id=%s", index, task.id)
        return task

    def clear(self) -> int:
        n = len(self._tasks)
        self._commit([])
        logger.info("Task list cleared (%d removed)", n)
        return n

    def replace_all(self, tasks: Iterable[Task]) -> None:
        out: list[Task] = []
        seen: set[str] = set()
        for t in tasks:
            if t.id in seen:
                raise ValueError(f"duplicate task id: {t.id}")
            seen.add(t.id)
            out.append(t)
        self._commit(out)
