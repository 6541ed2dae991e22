"""
Главный файл FastAPI приложения.

Запуск:
    uvicorn src.main:app --reload

API документация:
    http://localhost:8000/docs       - Swagger UI
    http://localhost:8000/redoc      - ReDoc
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy import text

from .api import tags_router, tasks_router
from .api.errors import error_response, register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .core.config import settings
from .core.database import AsyncSessionLocal, init_db
from .core.logging import get_logger, setup_logging

# LOG_LEVEL: DEBUG/INFO/WARNING/ERROR - что логировать
# LOG_FORMAT: json (production) / simple (development)
setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)

logger = get_logger(__name__)

APP_VERSION = "1.0.0"
APP_START_TIME: float = 0.0

# ============================================================================
# RATE LIMITER SETUP
# ============================================================================

limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Превышение лимита запросов в формате единого конверта."""
    return error_response(429, "RATE_LIMIT_EXCEEDED", f"Too many requests. Limit: {exc.detail}")


# ============================================================================
# LIFESPAN EVENT HANDLER
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: создание таблиц (если включено)
    Shutdown: лог с uptime
    """
    global APP_START_TIME
    APP_START_TIME = time.time()

    if settings.CREATE_TABLES_ON_STARTUP:
        await init_db()

    logger.info(
        "Application started",
        extra={
            "app_name": settings.APP_NAME,
            "version": APP_VERSION,
            "debug": settings.DEBUG,
            "log_level": settings.LOG_LEVEL,
        },
    )

    yield

    uptime = int(time.time() - APP_START_TIME)
    logger.info("Application stopped", extra={"uptime_seconds": uptime})


# ============================================================================
# CREATE APPLICATION
# ============================================================================

app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="""
    CRUD API для задач и тегов.

    ## Возможности

    * **Задачи** - список с сортировкой/пагинацией/фильтрами, создание, обновление, удаление
    * **Теги** - создаются вместе с задачами; просмотр и удаление

    ## Формат ответа

    Все ответы (в том числе ошибки) завёрнуты в конверт:

    ```json
    {"statusCode": 200, "message": "...", "data": ...}
    ```

    ## Архитектура

    ```
    API Layer (FastAPI) → Service Layer (unit of work) → Repository Layer (SQLAlchemy)
    ```
    """,
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.state.limiter = limiter
# slowapi handler имеет специфичный тип, но работает корректно
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(tasks_router)
app.include_router(tags_router)

register_error_handlers(app)


# ============================================================================
# ROOT ENDPOINT
# ============================================================================


@app.get("/", tags=["root"], summary="Root endpoint", description="Информация о API")
@limiter.limit(settings.RATE_LIMIT)
async def root(request: Request):
    return {
        "name": settings.APP_NAME,
        "version": APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "openapi": "/openapi.json",
        "endpoints": {
            "tasks": "/tasks",
            "tags": "/tags",
        },
        "rate_limit": settings.RATE_LIMIT,
    }


# ============================================================================
# HEALTH CHECK
# ============================================================================


@app.get(
    "/health", tags=["health"], summary="Health check", description="Проверка работоспособности API"
)
@limiter.limit(settings.RATE_LIMIT)
async def health_check(request: Request):
    """
    Проверяет подключение к базе данных.

    Пример ответа (200 OK):
    ```json
    {
        "status": "ok",
        "checks": {"database": "connected", "version": "1.0.0", "uptime_seconds": 3600},
        "timestamp": "2026-10-19T12:00:00+00:00"
    }
    ```

    Если БД недоступна - status "error" и 503.
    """
    uptime_seconds = int(time.time() - APP_START_TIME) if APP_START_TIME > 0 else 0

    db_status = "disconnected"
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
            db_status = "connected"
    except Exception:
        logger.warning("Health check: database unavailable", exc_info=True)

    overall_status = "ok" if db_status == "connected" else "error"

    return JSONResponse(
        status_code=200 if overall_status == "ok" else 503,
        content={
            "status": overall_status,
            "checks": {
                "database": db_status,
                "version": APP_VERSION,
                "uptime_seconds": uptime_seconds,
            },
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
