"""Service layer with business logic."""

from .paging import Page, Sort
from .tag import TagService
from .task import TagInput, TaskService

__all__ = [
    "TaskService",
    "TagService",
    "TagInput",
    "Page",
    "Sort",
]
