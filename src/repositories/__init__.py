"""Repository layer for data access."""

from .base import BaseRepository
from .tag import TagRepository
from .task import SORT_COLUMNS, TaskRepository
from .task_tag import TaskTagRepository

__all__ = [
    "BaseRepository",
    "TaskRepository",
    "TagRepository",
    "TaskTagRepository",
    "SORT_COLUMNS",
]
