# src/pocket_tasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

APP_LOGGER = "pocket_tasks"
LOG_FILE_NAME = "pocket-tasks.log"

# Loggers that write from the reminder thread; at INFO they would break into the prompt line.
BACKGROUND_LOGGERS: dict[str, int] = {
    "pocket_tasks.notifications.reminder_scheduler": logging.WARNING,
    "pocket_tasks.notifications.notifier": logging.WARNING,
}

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(threadName)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ConsoleFilter(logging.Filter):
    """Lets app records through, holds background-thread records to `quiet`, others to ERROR+."""

    def __init__(self, app: str = APP_LOGGER, quiet: Mapping[str, int] | None = None) -> None:
        super().__init__()
        self._app = app
        self._quiet = dict(BACKGROUND_LOGGERS if quiet is None else quiet)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        for prefix, level in self._quiet.items():
            if name == prefix or name.startswith(prefix + "."):
                return record.levelno >= level
        if name == self._app or name.startswith(self._app + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/pocket-tasks",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    file_name: str = LOG_FILE_NAME,
) -> Path:
    """
    Route all logging to a filtered stderr handler and a full log file.

    Replaces whatever handlers the root logger had, so calling it twice does
    not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / file_name

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # warnings.warn(...) arrives as "py.warnings", which the console filter treats as third-party.
    logging.captureWarnings(True)
    return log_file
