"""
Обработчики ошибок (Exception Handlers) для API.

Все ошибки, как и успешные ответы, отдаются в едином конверте:
{
    "statusCode": 404,
    "message": "Task with id ... not found",
    "data": {"code": "NOT_FOUND", "details": null}
}

Полные подробности (stack trace, текст ошибки БД) пишутся только в лог.
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import TaskManagementError
from ..core.logging import get_logger
from .schemas import ErrorBody, ErrorDetail, ErrorEnvelope

logger = get_logger(__name__)


def error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    """Build a JSON response carrying an error envelope."""
    envelope = ErrorEnvelope(
        status_code=int(status_code),
        message=message,
        data=ErrorBody(code=code, details=details),
    )
    return JSONResponse(
        status_code=int(status_code),
        content=envelope.model_dump(mode="json", by_alias=True),
    )


async def domain_error_handler(request: Request, exc: TaskManagementError) -> JSONResponse:
    """
    Обработчик для ошибок сервисов (InvalidArgument, NotFound, Persistence).
    """
    logger.warning(
        "Request rejected",
        extra={"code": exc.code, "error_message": exc.message, "path": request.url.path},
    )

    details = None
    if exc.details:
        details = [ErrorDetail(field=d["field"], message=d["message"]) for d in exc.details]

    return error_response(exc.status_code, exc.code, exc.message, details)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Обработчик для ошибок валидации запроса.

    Отсутствующее тело, неверный UUID, неизвестное значение enum и т.п.
    FastAPI по умолчанию отвечает 422, мы отвечаем 400 INVALID_ARGUMENT:
    {
        "statusCode": 400,
        "message": "Invalid request",
        "data": {
            "code": "INVALID_ARGUMENT",
            "details": [{"field": "taskName", "message": "Field required"}]
        }
    }
    """
    logger.warning("Validation error", extra={"errors": exc.errors(), "path": request.url.path})

    details = []
    for error in exc.errors():
        # loc: ["body", "tags", 0, "name"] или ["query", "page"]
        location = error.get("loc", [])
        field_path = location[1:] if len(location) > 1 else location
        field_name = ".".join(str(p) for p in field_path) or "body"
        details.append(ErrorDetail(field=field_name, message=error.get("msg", "Invalid value")))

    return error_response(HTTPStatus.BAD_REQUEST, "INVALID_ARGUMENT", "Invalid request", details)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Обработчик для всех остальных ошибок (500).

    Детали внутренних ошибок клиенту не показываем.
    """
    logger.error(f"Internal Error: {type(exc).__name__}: {exc}", exc_info=True)
    return error_response(
        HTTPStatus.INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Регистрирует все error handlers в приложении FastAPI.

    Вызывается из main.py:
        register_error_handlers(app)
    """
    app.add_exception_handler(TaskManagementError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
