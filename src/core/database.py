"""Database connection, session management and unit of work."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings
from .exceptions import PersistenceError
from .logging import get_logger

logger = get_logger(__name__)


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """
    Включить проверку внешних ключей для SQLite.

    SQLite по умолчанию игнорирует FOREIGN KEY и ON DELETE CASCADE,
    поэтому PRAGMA выполняется на каждом новом соединении.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# For SQLite, use StaticPool to avoid greenlet issues
# For PostgreSQL, use NullPool
if settings.is_sqlite:
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        poolclass=NullPool,
    )

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting a request-scoped database session.

    Usage in FastAPI:
        @app.get("/tasks")
        async def get_tasks(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def unit_of_work(session: AsyncSession, action: str) -> AsyncGenerator[AsyncSession, None]:
    """
    Выполнить блок операций как одну транзакцию.

    Все изменения внутри блока отправляются через flush(), а commit()
    делается один раз в конце. Любая ошибка SQLAlchemy откатывает
    транзакцию целиком и превращается в PersistenceError с общим
    сообщением; подробности пишутся в лог.

    Args:
        session: Сессия текущего запроса
        action: Что делаем, для сообщения об ошибке ("create task")

    Пример:
        async with unit_of_work(self.db, "delete task"):
            await self.task_repo.delete(task_id)
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(
            "Unit of work failed",
            extra={"action": action, "error": str(exc)},
            exc_info=True,
        )
        raise PersistenceError(f"Failed to {action}") from exc
    except Exception:
        await session.rollback()
        raise


async def init_db() -> None:
    """Create all tables."""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

