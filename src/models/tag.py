"""Tag model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDPrimaryKeyMixin


class Tag(Base, UUIDPrimaryKeyMixin):
    """Tag attached to tasks. Names are not unique."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    task_tags: Mapped[list["TaskTag"]] = relationship(
        "TaskTag", back_populates="tag", cascade="all, delete-orphan", passive_deletes=True
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", secondary="task_tags", viewonly=True, order_by="Task.name"
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
