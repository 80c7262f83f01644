# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. This file should contain only safe overrides.
"""

# Example: run without the console, delivering reminders only
# CONSOLE_ENABLED = False

# Example: behave as if notification permission was denied
# NOTIFICATIONS_ENABLED = False

# Example: keep data somewhere else
# DATA_DIR = "/tmp/pocket-tasks"
