"""Tag service with business logic."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import unit_of_work
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..models import Tag
from ..repositories import TagRepository
from .paging import Page

logger = get_logger(__name__)


class TagService:
    """Сервис для работы с тегами: список, детали, удаление."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tag_repo = TagRepository(db)

    async def list_tags(self, page: int = 0, total: int = 0) -> list[Tag]:
        """
        Получить страницу тегов (по имени).

        Пагинация как у задач: total <= 0 -> 5, page <= 0 -> первая страница.

        Raises:
            NotFoundError: На странице нет ни одного тега
        """
        window = Page.resolve(page, total)
        tags = await self.tag_repo.get_page(skip=window.skip, limit=window.limit)
        if not tags:
            raise NotFoundError("Empty list")
        return tags

    async def get_tag(self, tag_id: uuid.UUID) -> Tag:
        """
        Получить тег вместе с задачами.

        Raises:
            NotFoundError: Тег не найден
        """
        tag = await self.tag_repo.get_by_id_full(tag_id)
        if tag is None:
            raise NotFoundError.for_id("Tag", tag_id)
        return tag

    async def delete_tag(self, tag_id: uuid.UUID) -> None:
        """
        Удалить тег.

        Связи task_tags удаляются вместе с тегом, задачи остаются.

        Raises:
            NotFoundError: Тег не найден
            PersistenceError: Ошибка сохранения
        """
        if not await self.tag_repo.exists(tag_id):
            raise NotFoundError.for_id("Tag", tag_id)

        async with unit_of_work(self.db, "delete tag"):
            await self.tag_repo.delete(tag_id)

        logger.info("Tag deleted", extra={"tag_id": str(tag_id)})
