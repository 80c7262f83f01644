"""
Task subsystem.

Components:
- task_models.py: data structures (Task, RepeatMode)
- task_store.py: in-memory list mirrored to one storage key as JSON
"""
