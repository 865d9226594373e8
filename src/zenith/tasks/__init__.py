"""
Task list data: records, the persistent store and its view synchronization.
"""

from .model import TaskRecord, parse_priority
from .store import TaskStore
from .view import DisplaySnapshot, RowSnapshot, TodoView, render

__all__ = [
    "TaskRecord",
    "TaskStore",
    "parse_priority",
    "DisplaySnapshot",
    "RowSnapshot",
    "TodoView",
    "render",
]
