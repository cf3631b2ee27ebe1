"""
Mini Task Tracker - an in-memory task list for a single user.

This package provides the task model (basic, priority and deadline tasks) and
the store that assigns ids and runs lookup, sort and filter over them.
"""

from .version import VERSION
from .models import (
    Outcome,
    TaskKind,
    TaskStatus,
    Task,
    PriorityTask,
    DeadlineTask,
)
from .store import TaskStore, CreateResult, FilterResult, by_id, by_title, is_completed, is_pending

__version__ = VERSION

__all__ = [
    "VERSION",
    "Outcome",
    "TaskKind",
    "TaskStatus",
    "Task",
    "PriorityTask",
    "DeadlineTask",
    "TaskStore",
    "CreateResult",
    "FilterResult",
    "by_id",
    "by_title",
    "is_completed",
    "is_pending",
]
