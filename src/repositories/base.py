"""Base repository with common CRUD operations."""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base

# TypeVar для Generic класса - позволяет работать с любой моделью
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Базовый репозиторий с CRUD операциями.

    Репозиторий никогда не делает commit(): только flush(), чтобы
    несколько операций сервиса попадали в одну транзакцию (unit of work).

    Пример использования:
        repo = BaseRepository[Tag](Tag, db_session)
        tag = await repo.get_by_id(tag_id)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def create(self, obj: ModelType) -> ModelType:
        """
        Добавить объект в сессию и отправить INSERT (flush, без commit).

        Returns:
            Тот же объект с заполненным id
        """
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def get_by_id(self, id: uuid.UUID) -> ModelType | None:
        """
        Получить объект по ID.

        SQL эквивалент:
            SELECT * FROM table WHERE id = {id} LIMIT 1;
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update(self, obj: ModelType, **kwargs: Any) -> ModelType:
        """
        Обновить поля уже загруженного объекта.

        Пример:
            task = await repo.update(task, title="Новое название", status=TaskStatus.DONE)
        """
        for key, value in kwargs.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        await self.db.flush()
        return obj

    async def delete(self, id: uuid.UUID) -> bool:
        """
        Удалить запись по ID.

        Returns:
            True если удалено, False если не найдено

        SQL эквивалент:
            DELETE FROM table WHERE id={id};
        """
        result = await self.db.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def exists(self, id: uuid.UUID) -> bool:
        return await self.get_by_id(id) is not None

    async def count(self) -> int:
        """
        SQL эквивалент:
            SELECT COUNT(*) FROM table;
        """
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()
