"""
Pydantic схемы для API.

DTOs (Data Transfer Objects) - объекты для передачи данных через HTTP.
Наружу все поля отдаются в camelCase (statusCode, taskName), внутри
используются обычные snake_case имена.

Каждый ответ API (и успешный, и ошибка) завёрнут в единый конверт:
{
    "statusCode": 200,
    "message": "Get 2 tasks successfully",
    "data": ...
}
"""

import uuid
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import TaskPriority, TaskStatus

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, readable from ORM objects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ============================================================================
# RESPONSE ENVELOPE
# ============================================================================


class ApiResponse(CamelModel, Generic[DataT]):
    """
    Единый конверт ответа.

    data типизирован для каждого endpoint (задача, список задач, ...)
    и равен null для ответов без данных (например, DELETE).
    """

    status_code: int = Field(..., description="HTTP статус ответа")
    message: str = Field(..., description="Человекочитаемое сообщение")
    data: DataT | None = Field(default=None, description="Полезная нагрузка")


# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagView(CamelModel):
    """Тег внутри ответа с задачей."""

    id: uuid.UUID
    name: str


class TagReference(CamelModel):
    """
    Ссылка на тег при создании задачи.

    - id не передан или пустой UUID -> будет создан новый тег
    - тег с таким id есть -> его name будет перезаписан
    - тега с таким id нет -> будет создан с этим id
    """

    id: uuid.UUID | None = Field(None, description="ID тега (опционально)")
    name: str = Field(..., min_length=1, max_length=100, description="Имя тега")


class TaskSummary(CamelModel):
    """Задача без тегов (внутри ответа с тегом)."""

    id: uuid.UUID
    title: str
    name: str
    priority: TaskPriority
    status: TaskStatus


class TagDetailResponse(TagView):
    """Тег со списком задач, к которым он привязан."""

    tasks: list[TaskSummary] = []


# ============================================================================
# TASK SCHEMAS
# ============================================================================


class TaskBase(CamelModel):
    """Общие поля задачи для Create и Update."""

    title: str = Field(..., min_length=1, max_length=300, description="Заголовок задачи")
    task_name: str = Field(..., min_length=1, max_length=200, description="Название задачи")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="low, medium, high")
    status: TaskStatus = Field(
        default=TaskStatus.TODO, description="todo, in_progress, done, cancelled"
    )


class TaskCreate(TaskBase):
    """
    Схема для создания задачи (POST /tasks/create).

    Пример запроса:
    {
        "taskName": "api",
        "title": "Создать REST API",
        "priority": "high",
        "status": "todo",
        "tags": [
            {"id": "3fa85f64-5717-4562-b3fc-2c963f66afa6", "name": "backend"},
            {"name": "python"}
        ]
    }
    """

    tags: list[TagReference] = Field(default_factory=list, description="Теги задачи")


class TaskUpdate(TaskBase):
    """
    Схема для обновления задачи (PUT /tasks/{id}).

    Перезаписывает title, taskName, priority и status. Теги не меняются.
    """

    priority: TaskPriority
    status: TaskStatus


class TaskResponse(TaskSummary):
    """
    Задача в ответе API.

    Пример:
    {
        "id": "8c4a...",
        "title": "Создать REST API",
        "name": "api",
        "priority": "high",
        "status": "todo",
        "tags": [{"id": "3fa8...", "name": "backend"}]
    }
    """

    tags: list[TagView] = []


# ============================================================================
# ERROR SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """
    Ошибка для конкретного поля запроса.

    Пример:
    {"field": "sortOrder", "message": "Got 'UP'"}
    """

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    data конверта для ответов с ошибкой.

    Коды:
    - INVALID_ARGUMENT: некорректные входные данные
    - NOT_FOUND: ничего не найдено
    - PERSISTENCE_FAILURE: ошибка сохранения в БД
    - INTERNAL_ERROR: внутренняя ошибка сервера
    """

    code: str = Field(..., description="Код ошибки")
    details: list[ErrorDetail] | None = Field(default=None, description="Ошибки по полям")


# Конкретные типы конвертов (для response_model и документации)
TaskEnvelope = ApiResponse[TaskResponse]
TaskListEnvelope = ApiResponse[list[TaskResponse]]
TagEnvelope = ApiResponse[TagDetailResponse]
TagListEnvelope = ApiResponse[list[TagView]]
ErrorEnvelope = ApiResponse[ErrorBody]
StatusEnvelope = ApiResponse[None]
