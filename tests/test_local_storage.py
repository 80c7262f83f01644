# tests/test_local_storage.py

from __future__ import annotations

from pathlib import Path

import pytest

from pocket_tasks.storage.local_storage import LocalStorage


def test_set_get_remove(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path / "s")
    assert storage.get_item("tasks") is None

    storage.set_item("tasks", "[1, 2]")
    storage.set_item("tasks", "[3]")
    assert storage.get_item("tasks") == "[3]"
    assert storage.keys() == ["tasks"]

    storage.remove_item("tasks")
    storage.remove_item("tasks")
    assert storage.get_item("tasks") is None
    assert storage.keys() == []


def test_values_survive_a_new_instance(tmp_path: Path) -> None:
    LocalStorage(tmp_path).set_item("THEME", '"dark"')
    assert LocalStorage(tmp_path).get_item("THEME") == '"dark"'
    assert not list(tmp_path.glob("*.tmp"))


@pytest.mark.parametrize("key", ["", "../x", "a/b", ".hidden", "sp ace"])
def test_invalid_keys_rejected(tmp_path: Path, key: str) -> None:
    storage = LocalStorage(tmp_path)
    with pytest.raises(ValueError):
        storage.set_item(key, "v")
