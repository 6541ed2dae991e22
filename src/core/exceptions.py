"""
Типизированные ошибки предметной области.

Сервисы выбрасывают эти исключения, а API слой (src/api/errors.py)
превращает их в единый конверт ответа {statusCode, message, data}.
"""

from http import HTTPStatus


class TaskManagementError(Exception):
    """
    Базовый класс для всех ошибок приложения.

    Каждая ошибка несёт машинный код (code) и HTTP статус (status_code).
    """

    code: str = "ERROR"
    status_code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, details: list[dict] | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidArgumentError(TaskManagementError):
    """
    Некорректные входные данные (400).

    Использование:
        raise InvalidArgumentError("SortOrder only accepts ASC or DESC")
    """

    code = "INVALID_ARGUMENT"
    status_code = HTTPStatus.BAD_REQUEST


class NotFoundError(TaskManagementError):
    """
    Ничего не найдено (404).

    Использование:
        raise NotFoundError.for_id("Task", task_id)
        raise NotFoundError("Empty list")
    """

    code = "NOT_FOUND"
    status_code = HTTPStatus.NOT_FOUND

    @classmethod
    def for_id(cls, resource: str, resource_id: object) -> "NotFoundError":
        return cls(f"{resource} with id {resource_id} not found")


class PersistenceError(TaskManagementError):
    """
    Ошибка хранилища при сохранении unit of work (400).

    Сообщение всегда общее ("Failed to update task"), подробности
    исключения SQLAlchemy пишутся только в лог.
    """

    code = "PERSISTENCE_FAILURE"
    status_code = HTTPStatus.BAD_REQUEST
