"""Core application components."""

from .config import Settings, settings
from .database import AsyncSessionLocal, engine, get_db, init_db, unit_of_work
from .exceptions import (
    InvalidArgumentError,
    NotFoundError,
    PersistenceError,
    TaskManagementError,
)

__all__ = [
    "settings",
    "Settings",
    "engine",
    "AsyncSessionLocal",
    "get_db",
    "init_db",
    "unit_of_work",
    "TaskManagementError",
    "InvalidArgumentError",
    "NotFoundError",
    "PersistenceError",
]
