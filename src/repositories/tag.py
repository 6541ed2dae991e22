"""Tag repository with specific queries."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import EMPTY_ID, Tag
from .base import BaseRepository
from .task_tag import TaskTagRepository


class TagRepository(BaseRepository[Tag]):
    """Репозиторий для работы с тегами."""

    def __init__(self, db: AsyncSession):
        super().__init__(Tag, db)
        self.task_tag_repo = TaskTagRepository(db)

    async def get_by_id_full(self, id: uuid.UUID) -> Tag | None:
        """Получить тег вместе с задачами, к которым он привязан."""
        result = await self.db.execute(
            select(Tag)
            .options(selectinload(Tag.tasks))
            .where(Tag.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_page(self, skip: int = 0, limit: int = 5) -> list[Tag]:
        """
        Получить страницу тегов, отсортированных по имени.

        SQL эквивалент:
            SELECT * FROM tags ORDER BY name, id OFFSET {skip} LIMIT {limit};
        """
        result = await self.db.execute(
            select(Tag).order_by(Tag.name, Tag.id).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def upsert(self, tag_id: uuid.UUID | None, name: str) -> Tag:
        """
        Создать тег или переименовать существующий.

        Args:
            tag_id: ID тега; None или пустой UUID - сгенерировать новый
            name: Имя тега

        Returns:
            Созданный или обновлённый тег

        Логика:
            - тег с таким id есть -> перезаписываем name
            - тега нет -> создаём с этим id (или новым, если id пустой)
        """
        if tag_id is not None and tag_id != EMPTY_ID:
            tag = await self.get_by_id(tag_id)
            if tag is not None:
                return await self.update(tag, name=name)
            return await self.create(Tag(id=tag_id, name=name))

        return await self.create(Tag(id=uuid.uuid4(), name=name))

    async def delete(self, id: uuid.UUID) -> bool:
        """Удалить тег и все его связи с задачами."""
        await self.task_tag_repo.delete_by_tag(id)
        return await super().delete(id)
