"""
Reminder subsystem.

Components:
- triggers.py: when a reminder fires (once / daily / weekly)
- reminder_scheduler.py: in-memory schedule + polling loop + background thread
- notifier.py: console delivery
- reminder_api.py: task-level helpers used by commands and bootstrap
"""
