"""SQLAlchemy models for the task management API."""

from .base import EMPTY_ID, Base, UUIDPrimaryKeyMixin
from .tag import Tag
from .task import Task, TaskPriority, TaskStatus
from .task_tag import TaskTag

__all__ = [
    "Base",
    "UUIDPrimaryKeyMixin",
    "EMPTY_ID",
    "Tag",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TaskTag",
]
