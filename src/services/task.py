"""Task service with business logic."""

import uuid
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import unit_of_work
from ..core.exceptions import InvalidArgumentError, NotFoundError
from ..core.logging import get_logger
from ..models import Task, TaskPriority, TaskStatus
from ..repositories import TagRepository, TaskRepository, TaskTagRepository
from .paging import Page, Sort

logger = get_logger(__name__)


@dataclass(frozen=True)
class TagInput:
    """Tag reference supplied on task creation (id is optional)."""

    name: str
    id: uuid.UUID | None = None


class TaskService:
    """
    Сервис для работы с задачами.

    Каждая изменяющая операция выполняется как один unit of work:
    либо все изменения сохранены, либо ни одного.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.task_repo = TaskRepository(db)
        self.tag_repo = TagRepository(db)
        self.task_tag_repo = TaskTagRepository(db)

    async def list_tasks(
        self,
        sort_by: str | None = "id",
        sort_order: str | None = "ASC",
        page: int = 0,
        total: int = 0,
    ) -> list[Task]:
        """
        Получить отсортированную страницу задач с тегами.

        Args:
            sort_by: name | status | priority | id (регистр не важен)
            sort_order: ASC | DESC (регистр не важен)
            page: Номер страницы (с нуля; <= 0 -> первая)
            total: Размер страницы (<= 0 -> 5)

        Returns:
            Непустой список задач

        Raises:
            InvalidArgumentError: Некорректные параметры сортировки
            NotFoundError: На странице нет ни одной задачи
        """
        sort = Sort.parse(sort_by, sort_order)
        window = Page.resolve(page, total)

        tasks = await self.task_repo.get_page(
            sort_by=sort.field,
            descending=sort.descending,
            skip=window.skip,
            limit=window.limit,
        )
        if not tasks:
            raise NotFoundError("Empty list")
        return tasks

    async def filter_tasks(
        self,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
        tag_name: str | None = None,
        search: str | None = None,
        sort_by: str | None = "id",
        sort_order: str | None = "ASC",
        page: int = 0,
        total: int = 0,
    ) -> list[Task]:
        """
        Получить задачи по фильтрам.

        Пагинация и сортировка как в list_tasks, пустой результат -> NotFoundError.
        """
        sort = Sort.parse(sort_by, sort_order)
        window = Page.resolve(page, total)

        tasks = await self.task_repo.get_filtered(
            status=status,
            priority=priority,
            tag_name=tag_name.strip() if tag_name else None,
            search=search.strip() if search else None,
            sort_by=sort.field,
            descending=sort.descending,
            skip=window.skip,
            limit=window.limit,
        )
        if not tasks:
            raise NotFoundError("No tasks match the filter")
        return tasks

    async def get_task(self, task_id: uuid.UUID) -> Task:
        """
        Получить задачу с тегами.

        Raises:
            NotFoundError: Задача не найдена
        """
        task = await self.task_repo.get_by_id_full(task_id)
        if task is None:
            raise NotFoundError.for_id("Task", task_id)
        return task

    async def create_task(
        self,
        title: str,
        name: str,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.TODO,
        tags: list[TagInput] | None = None,
    ) -> Task:
        """
        Создать задачу и привязать к ней теги.

        Порядок действий (одна транзакция):
        1. Для каждого тега: есть с таким id -> переименовать, нет -> создать
           (пустой id -> сгенерировать новый)
        2. Создать задачу
        3. Создать связь task_tags для каждого тега

        Ошибка на любом шаге откатывает всё: ни тегов, ни задачи, ни связей.

        Raises:
            InvalidArgumentError: Пустые title/name или имя тега
            PersistenceError: Ошибка сохранения
        """
        title = self._require_text(title, "title")
        name = self._require_text(name, "taskName")
        tag_inputs = [
            TagInput(name=self._require_text(t.name, "tags.name"), id=t.id) for t in tags or []
        ]

        async with unit_of_work(self.db, "create task"):
            linked_tag_ids: list[uuid.UUID] = []
            for tag_input in tag_inputs:
                tag = await self.tag_repo.upsert(tag_input.id, tag_input.name)
                # Один и тот же тег дважды в запросе -> одна связь
                if tag.id not in linked_tag_ids:
                    linked_tag_ids.append(tag.id)

            task = await self.task_repo.create(
                Task(
                    id=uuid.uuid4(),
                    title=title,
                    name=name,
                    priority=priority,
                    status=status,
                )
            )

            for tag_id in linked_tag_ids:
                await self.task_tag_repo.link(task.id, tag_id)

        logger.info("Task created", extra={"task_id": str(task.id), "tags": len(linked_tag_ids)})
        return await self.get_task(task.id)

    async def update_task(
        self,
        task_id: uuid.UUID,
        title: str,
        name: str,
        priority: TaskPriority,
        status: TaskStatus,
    ) -> Task:
        """
        Перезаписать title/name/priority/status задачи.

        Теги задачи не меняются.

        Raises:
            InvalidArgumentError: Пустые title/name
            NotFoundError: Задача не найдена (ничего не меняется)
            PersistenceError: Ошибка сохранения
        """
        title = self._require_text(title, "title")
        name = self._require_text(name, "taskName")

        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise NotFoundError.for_id("Task", task_id)

        async with unit_of_work(self.db, "update task"):
            await self.task_repo.update(
                task, title=title, name=name, priority=priority, status=status
            )

        logger.info("Task updated", extra={"task_id": str(task_id)})
        return await self.get_task(task_id)

    async def delete_task(self, task_id: uuid.UUID) -> None:
        """
        Удалить задачу вместе с её связями task_tags.

        Raises:
            NotFoundError: Задача не найдена
            PersistenceError: Ошибка сохранения
        """
        if not await self.task_repo.exists(task_id):
            raise NotFoundError.for_id("Task", task_id)

        async with unit_of_work(self.db, "delete task"):
            await self.task_repo.delete(task_id)

        logger.info("Task deleted", extra={"task_id": str(task_id)})

    # Вспомогательные методы (private)

    @staticmethod
    def _require_text(value: str | None, field: str) -> str:
        if value is None or not value.strip():
            raise InvalidArgumentError(
                f"{field} cannot be empty",
                details=[{"field": field, "message": "Value cannot be empty"}],
            )
        return value.strip()
