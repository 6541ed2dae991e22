"""Task repository with specific queries."""

import uuid

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Tag, Task, TaskPriority, TaskStatus
from .base import BaseRepository
from .task_tag import TaskTagRepository

# Поля, по которым можно сортировать список задач.
# Неизвестное поле -> сортировка по id.
SORT_COLUMNS = {
    "id": Task.id,
    "name": Task.name,
    "status": Task.status,
    "priority": Task.priority,
}

LIKE_ESCAPE = "\\"


def _escape_like(text: str) -> str:
    """Экранировать % и _, чтобы поиск шёл по буквальной подстроке."""
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return text


class TaskRepository(BaseRepository[Task]):
    """
    Репозиторий для работы с задачами.

    Включает методы для:
    - Сортировки и пагинации списка
    - Фильтрации по статусу/приоритету/тегу/тексту
    - Загрузки задачи вместе с тегами
    - Удаления задачи вместе со связями
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Task, db)
        self.task_tag_repo = TaskTagRepository(db)

    async def get_by_id_full(self, id: uuid.UUID) -> Task | None:
        """
        Получить задачу вместе с тегами (eager loading).

        populate_existing=True перезаписывает объект из identity map,
        поэтому после create/update теги всегда актуальны.

        Использование:
            task = await repo.get_by_id_full(task_id)
            print([tag.name for tag in task.tags])  # без дополнительного запроса
        """
        result = await self.db.execute(
            select(Task)
            .options(selectinload(Task.tags))
            .where(Task.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_page(
        self,
        sort_by: str = "id",
        descending: bool = False,
        skip: int = 0,
        limit: int = 5,
    ) -> list[Task]:
        """
        Получить страницу задач с тегами.

        Args:
            sort_by: name | status | priority | id (иначе - id)
            descending: Сортировка по убыванию
            skip: Сколько записей пропустить
            limit: Размер страницы

        SQL эквивалент:
            SELECT * FROM tasks
            ORDER BY {sort_by} {ASC|DESC}, id
            OFFSET {skip} LIMIT {limit};
        """
        query = self._ordered(select(Task), sort_by, descending)
        return await self._fetch_page(query, skip, limit)

    async def get_filtered(
        self,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        tag_name: str | None = None,
        search: str | None = None,
        sort_by: str = "id",
        descending: bool = False,
        skip: int = 0,
        limit: int = 5,
    ) -> list[Task]:
        """
        Получить задачи с фильтрами, сортировкой и пагинацией.

        Все фильтры комбинируются через AND.

        SQL эквивалент:
            SELECT tasks.* FROM tasks
            WHERE status = {status}                               -- если указан
              AND priority = {priority}                           -- если указан
              AND EXISTS (SELECT 1 FROM task_tags JOIN tags ...
                          WHERE tags.name = {tag_name})           -- если указан
              AND (title ILIKE '%{search}%' ESCAPE '\\' OR name ILIKE ... )  -- % и _ экранированы
            ORDER BY {sort_by} {ASC|DESC}, id
            OFFSET {skip} LIMIT {limit};
        """
        conditions = []

        if status is not None:
            conditions.append(Task.status == status)

        if priority is not None:
            conditions.append(Task.priority == priority)

        if tag_name:
            conditions.append(Task.tags.any(Tag.name == tag_name))

        if search:
            pattern = f"%{_escape_like(search)}%"
            conditions.append(
                or_(
                    Task.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Task.name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        query = select(Task)
        if conditions:
            query = query.where(and_(*conditions))

        query = self._ordered(query, sort_by, descending)
        return await self._fetch_page(query, skip, limit)

    async def delete(self, id: uuid.UUID) -> bool:
        """
        Удалить задачу и все её связи с тегами.

        Сами теги остаются.
        """
        await self.task_tag_repo.delete_by_task(id)
        return await super().delete(id)

    # Вспомогательные методы (private)

    def _ordered(self, query: Select, sort_by: str, descending: bool) -> Select:
        column = SORT_COLUMNS.get(sort_by, Task.id)
        order = column.desc() if descending else column.asc()
        # id как второй ключ: стабильный порядок при одинаковых значениях
        return query.order_by(order, Task.id)

    async def _fetch_page(self, query: Select, skip: int, limit: int) -> list[Task]:
        query = query.options(selectinload(Task.tags)).offset(skip).limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())
