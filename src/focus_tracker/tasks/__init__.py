"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStats, NOT_FOUND / NO_OP results)
- task_store.py: ordered in-memory store, overdue predicate, record (de)serialization
"""
