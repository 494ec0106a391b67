"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, TaskStatus)
- local_storage.py: SQLite key-value store (one key per blob)
- task_store.py: the task collection persisted as one JSON blob
- task_api.py: the input form (Idle / Editing) and high-level task operations
"""
