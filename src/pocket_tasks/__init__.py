"""pocket-tasks: a small console task list with reminders."""

__version__ = "0.1.0"
