"""
API endpoints для работы с задачами.

- GET    /tasks            - список с сортировкой и пагинацией
- GET    /tasks/filter     - список с фильтрами
- GET    /tasks/{id}       - одна задача
- POST   /tasks/create     - создание (вместе с тегами)
- PUT    /tasks/{id}       - обновление
- DELETE /tasks/{id}       - удаление

Ошибки сервисов (InvalidArgumentError, NotFoundError, PersistenceError)
превращаются в конверт обработчиками из errors.py.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status

from ..models import TaskPriority, TaskStatus
from ..services import TagInput, TaskService
from .dependencies import get_task_service
from .schemas import (
    ErrorEnvelope,
    StatusEnvelope,
    TaskCreate,
    TaskEnvelope,
    TaskListEnvelope,
    TaskResponse,
    TaskUpdate,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])

LIST_ERRORS = {
    400: {"model": ErrorEnvelope, "description": "Некорректные параметры сортировки"},
    404: {"model": ErrorEnvelope, "description": "Пустой список"},
}


def _task_list(tasks, message: str) -> TaskListEnvelope:
    return TaskListEnvelope(
        status_code=status.HTTP_200_OK,
        message=message,
        data=[TaskResponse.model_validate(t) for t in tasks],
    )


# ============================================================================
# GET TASKS (сортировка и пагинация)
# ============================================================================


@router.get(
    "",
    response_model=TaskListEnvelope,
    summary="Получить список задач",
    description="""
    Страница задач с тегами.

    - sortBy: name | status | priority | id (регистр не важен, неизвестное поле → id)
    - sortOrder: ASC | DESC (регистр не важен, иначе 400)
    - page: номер страницы с нуля (skip = page × total)
    - total: размер страницы (≤ 0 → 5)

    Пустая страница → 404.
    """,
    responses=LIST_ERRORS,
)
async def get_tasks(
    sort_by: str = Query("id", alias="sortBy", description="Поле сортировки"),
    sort_order: str = Query("ASC", alias="sortOrder", description="ASC или DESC"),
    page: int = Query(0, description="Номер страницы"),
    total: int = Query(5, description="Размер страницы"),
    service: TaskService = Depends(get_task_service),
) -> TaskListEnvelope:
    """
    Примеры запросов:
    ```
    GET /tasks                                   # первые 5 задач по id
    GET /tasks?sortBy=priority&sortOrder=desc    # по приоритету, по убыванию
    GET /tasks?page=1&total=10                   # задачи 11-20
    ```
    """
    tasks = await service.list_tasks(sort_by=sort_by, sort_order=sort_order, page=page, total=total)
    return _task_list(tasks, f"Get {len(tasks)} tasks successfully")


# ============================================================================
# FILTER TASKS
# ============================================================================


@router.get(
    "/filter",
    response_model=TaskListEnvelope,
    summary="Получить задачи с фильтрами",
    description="""
    Фильтры (комбинируются через AND):
    - status: todo, in_progress, done, cancelled
    - priority: low, medium, high
    - tag: точное имя тега
    - search: подстрока в title или name (без учёта регистра)

    Сортировка и пагинация как у GET /tasks.
    """,
    responses=LIST_ERRORS,
)
async def filter_tasks(
    task_status: TaskStatus | None = Query(None, alias="status"),
    priority: TaskPriority | None = Query(None),
    tag: str | None = Query(None, description="Имя тега"),
    search: str | None = Query(None, description="Поиск по title/name"),
    sort_by: str = Query("id", alias="sortBy"),
    sort_order: str = Query("ASC", alias="sortOrder"),
    page: int = Query(0),
    total: int = Query(5),
    service: TaskService = Depends(get_task_service),
) -> TaskListEnvelope:
    tasks = await service.filter_tasks(
        status=task_status,
        priority=priority,
        tag_name=tag,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        total=total,
    )
    return _task_list(tasks, f"Found {len(tasks)} tasks")


# ============================================================================
# GET TASK BY ID
# ============================================================================


@router.get(
    "/{task_id}",
    response_model=TaskEnvelope,
    summary="Получить задачу по ID",
    responses={404: {"model": ErrorEnvelope, "description": "Задача не найдена"}},
)
async def get_task(
    task_id: uuid.UUID, service: TaskService = Depends(get_task_service)
) -> TaskEnvelope:
    task = await service.get_task(task_id)
    return TaskEnvelope(
        status_code=status.HTTP_200_OK,
        message="Get task successfully",
        data=TaskResponse.model_validate(task),
    )


# ============================================================================
# CREATE TASK
# ============================================================================


@router.post(
    "/create",
    response_model=TaskEnvelope,
    summary="Создать задачу",
    description="""
    Создать задачу и привязать к ней теги.

    Для каждого тега:
    - тег с таким id есть → его имя перезаписывается
    - тега нет → создаётся (без id или с пустым UUID → новый id)

    Всё выполняется в одной транзакции.
    """,
    responses={400: {"model": ErrorEnvelope, "description": "Ошибка валидации или сохранения"}},
)
async def create_task(
    data: TaskCreate, service: TaskService = Depends(get_task_service)
) -> TaskEnvelope:
    """
    Пример запроса:
    ```json
    {
        "taskName": "api",
        "title": "Создать REST API",
        "priority": "high",
        "status": "todo",
        "tags": [{"name": "backend"}, {"name": "python"}]
    }
    ```
    """
    task = await service.create_task(
        title=data.title,
        name=data.task_name,
        priority=data.priority,
        status=data.status,
        tags=[TagInput(name=t.name, id=t.id) for t in data.tags],
    )
    return TaskEnvelope(
        status_code=status.HTTP_200_OK,
        message="Create task successfully",
        data=TaskResponse.model_validate(task),
    )


# ============================================================================
# UPDATE TASK
# ============================================================================


@router.put(
    "/{task_id}",
    response_model=TaskEnvelope,
    summary="Обновить задачу",
    description="Перезаписывает title, taskName, priority и status. Теги не меняются.",
    responses={
        400: {"model": ErrorEnvelope, "description": "Ошибка валидации или сохранения"},
        404: {"model": ErrorEnvelope, "description": "Задача не найдена"},
    },
)
async def update_task(
    task_id: uuid.UUID,
    data: TaskUpdate,
    service: TaskService = Depends(get_task_service),
) -> TaskEnvelope:
    task = await service.update_task(
        task_id,
        title=data.title,
        name=data.task_name,
        priority=data.priority,
        status=data.status,
    )
    return TaskEnvelope(
        status_code=status.HTTP_200_OK,
        message="Update task successfully",
        data=TaskResponse.model_validate(task),
    )


# ============================================================================
# DELETE TASK
# ============================================================================


@router.delete(
    "/{task_id}",
    response_model=StatusEnvelope,
    summary="Удалить задачу",
    description="Удаляет задачу и её связи с тегами. Сами теги остаются.",
    responses={
        400: {"model": ErrorEnvelope, "description": "Ошибка сохранения"},
        404: {"model": ErrorEnvelope, "description": "Задача не найдена"},
    },
)
async def delete_task(
    task_id: uuid.UUID, service: TaskService = Depends(get_task_service)
) -> StatusEnvelope:
    await service.delete_task(task_id)
    return StatusEnvelope(status_code=status.HTTP_200_OK, message="Delete task successfully")
