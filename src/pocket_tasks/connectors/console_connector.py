# src/pocket_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..cli.commands import AddArgs, add_task_from_input, render_tasks
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _colorize(state: AppState, text: str, *, role: str = "text") -> str:
    """Wrap text in the active theme colours (only on a TTY)."""
    if not sys.stdout.isatty():
        return text
    pal = state.appearance.palette
    return f"{getattr(pal, role)}{text}{pal.reset}"


def _print_ts(state: AppState, text: str, *, role: str = "text") -> None:
    print(_colorize(state, f"[{_ts_local()}] {text}", role=role), flush=True)


def handle_line(state: AppState, line: str, emit=None) -> str | None:
    """
    Route one line of input: slash commands go to the registry,
    anything else becomes a new task.
    """
    line = line.strip()
    if not line:
        return None

    with state.lock:
        reply = command_registry.handle(state, line, emit=emit)
        if reply is not None:
            return reply
        return add_task_from_input(state, AddArgs(text=line), emit)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%d).", state.task_store.count_tasks())
    _print_ts(state, "[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.", role="accent")

    with state.lock:
        _print_ts(state, render_tasks(state.task_store.list_tasks()))

    def emit(text: str) -> None:
        # Immediate feedback (alerts) while a command is still running.
        _print_ts(state, text, role="important")

    while True:
        try:
            user_input = input(_colorize(state, "> ", role="accent")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            _print_ts(state, reply)

    logger.info("Console connector finished.")
