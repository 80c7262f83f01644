# src/pocket_tasks/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..notifications.reminder_api import (
    NotificationPermissionError,
    cancel_task_reminder,
    schedule_task_reminder,
)
from ..notifications.triggers import describe_trigger
from ..preferences.appearance import Theme
from ..tasks.task_models import RepeatMode, Task, to_local_naive

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

PERMISSION_ALERT = "Notifications are not allowed. Enable them to get task reminders."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other text adds it as a task.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def _format_task(task: Task, index: int) -> str:
    flags = "!" if task.important else " "
    extra: list[str] = []
    if task.category:
        extra.append(f"[{task.category}]")
    if task.due_at is not None:
        due = f"due {task.due_at:%Y-%m-%d %H:%M}"
        if task.repeat != RepeatMode.NONE:
            due += f" ({task.repeat.value})"
        extra.append(due)
    suffix = f"  {' '.join(extra)}" if extra else ""
    return f"{index:>3}. {flags} {task.text}{suffix}  (id {task.id})"


def render_tasks(tasks: list[Task], *, title: str = "Tasks") -> str:
    if not tasks:
        return f"{title}: (empty)"
    lines = [f"{title} ({len(tasks)}):"]
    for i, t in enumerate(tasks, start=1):
        lines.append(_format_task(t, i))
    return "\n".join(lines)


# ---- argument parsing ----


@dataclass(slots=True)
class AddArgs:
    text: str
    category: str | None = None
    important: bool = False
    due_at: datetime | None = None
    repeat: RepeatMode = RepeatMode.NONE


ADD_USAGE = (
    'Usage: /add [--cat NAME] [--important] [--due "YYYY-MM-DD HH:MM"] '
    "[--repeat none|daily|weekly] text..."
)


def parse_add_args(args: list[str]) -> AddArgs:
    """Parse /add options; raises ValueError with a user-facing message."""
    words: list[str] = []
    category: str | None = None
    important = False
    due_at: datetime | None = None
    repeat_raw: str | None = None

    it = iter(args)
    for arg in it:
        if arg in ("--cat", "-c"):
            category = next(it, None)
            if not category:
                raise ValueError("--cat needs a name")
        elif arg in ("--important", "-i", "!"):
            important = True
        elif arg in ("--due", "-d"):
            raw = next(it, None)
            if not raw:
                raise ValueError("--due needs a date")
            try:
                due_at = to_local_naive(datetime.fromisoformat(raw))
            except ValueError:
                raise ValueError(f"bad date {raw!r}, expected YYYY-MM-DD HH:MM") from None
        elif arg in ("--repeat", "-r"):
            repeat_raw = next(it, None)
            if not repeat_raw:
                raise ValueError("--repeat needs none, daily or weekly")
        else:
            words.append(arg)

    repeat = RepeatMode.NONE
    if repeat_raw is not None:
        try:
            repeat = RepeatMode(repeat_raw.strip().lower())
        except ValueError:
            raise ValueError(f"bad repeat mode {repeat_raw!r}") from None
        if repeat != RepeatMode.NONE and due_at is None:
            raise ValueError("--repeat requires --due")

    return AddArgs(
        text=" ".join(words).strip(),
        category=category,
        important=important,
        due_at=due_at,
        repeat=repeat,
    )


# ---- handlers ----


def add_task_from_input(state: AppState, add: AddArgs, emit: CommandEmitter | None = None) -> str:
    """Shared by /add and plain-text input."""
    if not add.text:
        return "Nothing to add."

    task = state.task_store.add_task(
        add.text,
        category=add.category,
        important=add.important,
        due_at=add.due_at,
        repeat=add.repeat,
    )

    note = ""
    if task.due_at is not None:
        try:
            reminder = schedule_task_reminder(state, task)
        except NotificationPermissionError:
            if emit:
                with contextlib.suppress(Exception):
                    emit(f"[ALERT] {PERMISSION_ALERT}")
            note = "\n(No reminder: notifications not allowed.)"
        else:
            if reminder is None:
                note = "\n(Due time already passed; no reminder scheduled.)"
            else:
                note = f"\nReminder {describe_trigger(reminder.trigger)}."

    logger.debug("Added task id=%s", task.id)
    return f"Added: {task.text}{note}\n{render_tasks(state.task_store.list_tasks())}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    wallpaper = state.appearance.wallpaper
    if wallpaper and wallpaper.startswith("data:"):
        wallpaper_s = "custom image"
    else:
        wallpaper_s = wallpaper or "none"
    notifications = "ON" if state.notifier.request_permission() else "OFF"
    return (
        "Status:\n"
        f"  Tasks: {state.task_store.count_tasks()}\n"
        f"  Theme: {state.appearance.theme.value}\n"
        f"  Wallpaper: {wallpaper_s}\n"
        f"  Notifications: {notifications}\n"
        f"  Pending reminders: {len(state.reminders.pending())}\n"
        f"  Storage: {getattr(settings, 'storage_dir', '?')}"
    )


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    try:
        add = parse_add_args(args)
    except ValueError as e:
        return f"{e}.\n{ADD_USAGE}"
    if not add.text:
        return ADD_USAGE
    return add_task_from_input(state, add, emit)


def cmd_list(state: AppState, args: list[str]) -> str:
    category: str | None = None
    important_only = False
    it = iter(args)
    for arg in it:
        if arg in ("--cat", "-c"):
            category = next(it, None)
            if not category:
                return "--cat needs a name.\nUsage: /list [--cat NAME] [--important]"
        elif arg in ("--important", "-i", "!"):
            important_only = True
        else:
            return "Usage: /list [--cat NAME] [--important]"

    tasks = state.task_store.list_tasks(category=category, important_only=important_only)
    title = "Tasks"
    if category:
        title += f" in {category}"
    if important_only:
        title = f"Important {title.lower()}"
    out = render_tasks(tasks, title=title)
    cats = state.task_store.categories()
    if cats and not category:
        out += f"\nCategories: {', '.join(cats)}"
    return out


def cmd_del(state: AppState, args: list[str]) -> str:
    """
    /del <id>   -> remove task by id
    /del #n     -> remove the n-th task as shown by /list
    """
    if len(args) != 1:
        return "Usage: /del <id> | /del #n"

    ref = args[0].strip()
    if ref.startswith("#"):
        try:
            index = int(ref[1:]) - 1
        except ValueError:
            return f"Bad row number: {ref}"
        removed = state.task_store.remove_at(index)
    else:
        removed = state.task_store.remove_task(ref)

    if removed is None:
        return f"No such task: {ref}"

    cancel_task_reminder(state, removed.id)
    return f"Deleted: {removed.text}\n{render_tasks(state.task_store.list_tasks())}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    n = state.task_store.clear()
    state.reminders.cancel_all()
    return f"Cleared {n} task(s).\n{render_tasks(state.task_store.list_tasks())}"


def cmd_theme(state: AppState, args: list[str]) -> str:
    """
    /theme          -> toggle light/dark
    /theme light    -> set light
    /theme dark     -> set dark
    """
    if not args:
        theme = state.appearance.toggle_theme()
        return f"Theme switched to {theme.value}.\n{render_tasks(state.task_store.list_tasks())}"

    arg = args[0].lower()
    try:
        theme = Theme(arg)
    except ValueError:
        return "Usage: /theme [light|dark]"
    state.appearance.set_theme(theme)
    return f"Theme set to {theme.value}.\n{render_tasks(state.task_store.list_tasks())}"


def cmd_wallpaper(state: AppState, args: list[str]) -> str:
    """
    /wallpaper              -> show current wallpaper
    /wallpaper off          -> remove wallpaper
    /wallpaper <url>        -> use an image URL/path as is
    /wallpaper --file PATH  -> embed a local image file
    """
    if not args:
        wp = state.appearance.wallpaper
        if not wp:
            return "No wallpaper set."
        if wp.startswith("data:"):
            return "Wallpaper: custom image."
        return f"Wallpaper: {wp}"

    if args[0] in ("off", "none", "clear"):
        state.appearance.change_wallpaper(None)
        return "Wallpaper removed."

    if args[0] in ("--file", "-f"):
        if len(args) < 2:
            return "Usage: /wallpaper --file PATH"
        try:
            state.appearance.custom_wallpaper(args[1])
        except (OSError, ValueError) as e:
            logger.info("Custom wallpaper rejected: %s", e)
            return f"Cannot use that file: {e}"
        return "Custom wallpaper set."

    state.appearance.change_wallpaper(args[0])
    return f"Wallpaper set to {args[0]}."


def cmd_reminders(state: AppState, args: list[str]) -> str:
    pending = state.reminders.pending()
    if not pending:
        return "No pending reminders."
    lines = [f"Pending reminders ({len(pending)}):"]
    for r in pending:
        lines.append(
            f"  {r.next_fire_at:%Y-%m-%d %H:%M}  {r.body}  ({describe_trigger(r.trigger)}, id {r.id})"
        )
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show task count, theme and reminder status.")
registry.register("add", cmd_add, help_text="Add a task: " + ADD_USAGE[len("Usage: /add ") :])
registry.register("list", cmd_list, help_text="List tasks: /list [--cat NAME] [--important].", aliases=["ls"])
registry.register("del", cmd_del, help_text="Delete a task: /del <id> | /del #n.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("theme", cmd_theme, help_text="Toggle theme, or /theme light | /theme dark.")
registry.register(
    "wallpaper", cmd_wallpaper, help_text="Background image: /wallpaper off | <url> | --file PATH."
)
registry.register("reminders", cmd_reminders, help_text="Show pending reminders.")
