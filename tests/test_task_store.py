# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import datetime

import pytest

from pocket_tasks.storage.local_storage import LocalStorage
from pocket_tasks.tasks.task_models import RepeatMode, Task
from pocket_tasks.tasks.task_store import TaskStore

from .fakes import BrokenStorage, FlakyStorage


def test_add_task_appends_and_persists(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    assert store.count_tasks() == 0

    task = store.add_task("  buy milk  ", category="home", now=1_700_000_000.0)
    assert store.count_tasks() == 1
    assert task.text == "buy milk"
    assert task.id == "1700000000000"
    assert task.category == "home"

    stored = json.loads(storage.get_item("tasks") or "[]")
    assert stored == [task.to_dict()]


def test_add_task_rejects_empty_text(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    with pytest.raises(ValueError):
        store.add_task("   ")
    assert store.count_tasks() == 0


def test_ids_stay_unique_within_same_millisecond(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    a = store.add_task("a", now=10.0)
    b = store.add_task("b", now=10.0)
    assert a.id == "10000"
    assert b.id == "10001"


def test_remove_task_removes_exactly_that_record(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    a = store.add_task("a", now=1.0)
    b = store.add_task("b", now=2.0)
    c = store.add_task("c", now=3.0)

    removed = store.remove_task(b.id)
    assert removed == b
    assert [t.id for t in store.list_tasks()] == [a.id, c.id]
    assert store.remove_task("nope") is None


def test_remove_at_and_clear(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    store.add_task("a", now=1.0)
    store.add_task("b", now=2.0)

    assert store.remove_at(5) is None
    removed = store.remove_at(0)
    assert removed is not None and removed.text == "a"

    assert store.clear() == 1
    assert store.list_tasks() == []
    assert json.loads(storage.get_item("tasks") or "null") == []


def test_round_trip_after_reload(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    store.add_task("plain", now=1.0)
    store.add_task(
        "dentist",
        category="health",
        important=True,
        due_at=datetime(2030, 5, 1, 9, 30),
        repeat=RepeatMode.WEEKLY,
        now=2.0,
    )

    reloaded = TaskStore(storage)
    assert reloaded.list_tasks() == store.list_tasks()


def test_filtering_and_categories(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    store.add_task("a", category="Work", now=1.0)
    store.add_task("b", category="home", important=True, now=2.0)
    store.add_task("c", category="work", important=True, now=3.0)
    store.add_task("d", now=4.0)

    assert [t.text for t in store.list_tasks(category="work")] == ["a", "c"]
    assert [t.text for t in store.list_tasks(important_only=True)] == ["b", "c"]
    assert [t.text for t in store.list_tasks(category="work", important_only=True)] == ["c"]
    assert store.categories() == ["Work", "home", "work"]


def test_broken_or_garbage_storage_starts_empty(storage: LocalStorage) -> None:
    assert TaskStore(BrokenStorage()).count_tasks() == 0

    storage.set_item("tasks", "{not json")
    assert TaskStore(storage).count_tasks() == 0

    storage.set_item("tasks", json.dumps({"id": "1"}))
    assert TaskStore(storage).count_tasks() == 0


def test_loads_legacy_strings_and_drops_bad_records(storage: LocalStorage) -> None:
    storage.set_item(
        "tasks",
        json.dumps(
            [
                "water plants",
                "",
                42,
                {"id": "7", "text": "call mom", "important": True, "due": "nonsense", "repeat": "hourly"},
                {"id": "7", "text": "duplicate"},
            ]
        ),
    )
    store = TaskStore(storage)
    tasks = store.list_tasks()
    assert tasks == [
        Task(id="legacy-0", text="water plants"),
        Task(id="7", text="call mom", important=True),
    ]


def test_replace_all_rejects_duplicates(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    with pytest.raises(ValueError):
        store.replace_all([Task(id="1", text="a"), Task(id="1", text="b")])

    store.replace_all([Task(id="2", text="b"), Task(id="1", text="a")])
    assert [t.id for t in TaskStore(storage).list_tasks()] == ["2", "1"]


def test_failed_write_leaves_list_unchanged() -> None:
    storage = FlakyStorage()
    store = TaskStore(storage)
    a = store.add_task("a", now=1.0)
    b = store.add_task("b", now=2.0)
    saved = storage.items["tasks"]

    storage.fail_writes = True
    with pytest.raises(OSError):
        store.add_task("c", now=3.0)
    with pytest.raises(OSError):
        store.remove_task(a.id)
    with pytest.raises(OSError):
        store.remove_at(1)
    with pytest.raises(OSError):
        store.clear()

    assert store.list_tasks() == [a, b]
    assert storage.items["tasks"] == saved

    storage.fail_writes = False
    c = store.add_task("c", now=3.0)
    assert [t.id for t in TaskStore(storage).list_tasks()] == [a.id, b.id, c.id]


def test_important_flag_needs_a_real_boolean(storage: LocalStorage) -> None:
    storage.set_item(
        "tasks",
        json.dumps(
            [
                {"id": "9", "text": "x", "important": "false"},
                {"id": "10", "text": "y", "important": 1},
                {"id": "11", "text": "z", "important": True},
            ]
        ),
    )
    assert [t.important for t in TaskStore(storage).list_tasks()] == [False, False, True]
