"""Task model."""

import enum

from sqlalchemy import Enum as SQLEnum
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDPrimaryKeyMixin


class _CaseInsensitiveEnum(str, enum.Enum):
    """String enum that accepts any letter case on input ("HIGH", "High")."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class TaskStatus(_CaseInsensitiveEnum):
    """Task status enum."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"


class TaskPriority(_CaseInsensitiveEnum):
    """Task priority enum."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base, UUIDPrimaryKeyMixin):
    """Task with a many-to-many set of tags."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        SQLEnum(TaskStatus, native_enum=False),
        default=TaskStatus.TODO,
        server_default=TaskStatus.TODO.name,
        nullable=False,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        SQLEnum(TaskPriority, native_enum=False),
        default=TaskPriority.MEDIUM,
        server_default=TaskPriority.MEDIUM.name,
        nullable=False,
    )

    # Association rows (удаляются вместе с задачей)
    task_tags: Mapped[list["TaskTag"]] = relationship(
        "TaskTag", back_populates="task", cascade="all, delete-orphan", passive_deletes=True
    )

    # Read-only view of the tags through task_tags, ordered by name
    tags: Mapped[list["Tag"]] = relationship(
        "Tag", secondary="task_tags", viewonly=True, order_by="Tag.name"
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, name='{self.name}', status={self.status.value})>"
