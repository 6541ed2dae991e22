"""HTTP middleware for request logging and tracing."""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.logging import generate_request_id, get_logger, request_id_var

logger = get_logger("api.requests")

REQUEST_ID_HEADER = "X-Request-ID"

# Не логируем служебные пути, чтобы не шуметь
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware для логирования HTTP запросов.

    - Берёт X-Request-ID из запроса или генерирует новый
    - Кладёт его в request_id_var (попадает во все логи запроса)
    - Возвращает его в заголовке ответа
    - Логирует метод, путь, статус и время выполнения

    Пример лога (JSON):
    {
        "level": "INFO",
        "logger": "api.requests",
        "message": "Request completed",
        "request_id": "abc-123",
        "extra": {"method": "GET", "path": "/tasks", "status": 200, "duration_ms": 12}
    }
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        token = request_id_var.set(request_id)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        request_info = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": client_ip,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **request_info,
                    "duration_ms": int((time.perf_counter() - start_time) * 1000),
                    "error": str(e),
                },
                exc_info=True,
            )
            request_id_var.reset(token)
            raise

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path not in QUIET_PATHS:
            log = logger.info if response.status_code < 400 else logger.warning
            log(
                "Request completed",
                extra={**request_info, "status": response.status_code, "duration_ms": duration_ms},
            )

        request_id_var.reset(token)
        return response
