"""
Dependencies для FastAPI endpoints.

Каждый запрос получает свою сессию БД (get_db), из которой создаются
сервисы. Глобальной сессии нет:

    async def create_task(
        data: TaskCreate,
        service: TaskService = Depends(get_task_service),
    ):
        ...

В тестах get_db подменяется через app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..services import TagService, TaskService


async def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    """
    Dependency для TaskService.

    Цепочка зависимостей:
        get_task_service зависит от get_db
        → FastAPI вызовет get_db() и передаст сессию сюда
        → endpoint получит готовый TaskService
    """
    return TaskService(db)


async def get_tag_service(db: AsyncSession = Depends(get_db)) -> TagService:
    """Dependency для TagService."""
    return TagService(db)


__all__ = ["get_db", "get_task_service", "get_tag_service"]
