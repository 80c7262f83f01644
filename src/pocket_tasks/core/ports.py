# src/pocket_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the app.

Stores and services depend on Protocols instead of concrete implementations,
so storage backends and notifiers stay swappable and easy to fake in tests.
"""

from typing import Awaitable, Protocol


class KeyValueStorage(Protocol):
    """Persistent string key/value store (localStorage-like)."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class Notifier(Protocol):
    """
    Delivery side of reminders.

    request_permission() stands in for the platform permission prompt;
    notify() is awaited from the reminder loop.
    """

    def request_permission(self) -> bool: ...
    def notify(self, *, title: str, body: str) -> Awaitable[None]: ...

