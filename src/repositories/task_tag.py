"""Repository for task/tag association rows."""

import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import TaskTag
from .base import BaseRepository


class TaskTagRepository(BaseRepository[TaskTag]):
    """
    Репозиторий для таблицы связей task_tags.

    Удаление связей делается явно, а не только через ON DELETE CASCADE:
    bulk DELETE в TaskRepository/TagRepository не проходит через ORM cascade.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(TaskTag, db)

    async def link(self, task_id: uuid.UUID, tag_id: uuid.UUID) -> TaskTag:
        """Создать связь задачи с тегом."""
        return await self.create(TaskTag(task_id=task_id, tag_id=tag_id))

    async def delete_by_task(self, task_id: uuid.UUID) -> int:
        """
        Удалить все связи задачи.

        Returns:
            Количество удалённых строк
        """
        result = await self.db.execute(delete(TaskTag).where(TaskTag.task_id == task_id))
        return result.rowcount

    async def delete_by_tag(self, tag_id: uuid.UUID) -> int:
        """
        Удалить все связи тега.

        Returns:
            Количество удалённых строк
        """
        result = await self.db.execute(delete(TaskTag).where(TaskTag.tag_id == tag_id))
        return result.rowcount
