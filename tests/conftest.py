"""
Pytest fixtures для тестов.

Предоставляет:
- test_db: изолированная SQLite in-memory БД для каждого теста
- test_client: HTTP клиент для тестирования API endpoints
- make_task: фабрика задач через TaskService
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.api.dependencies import get_db
from src.core.database import enable_sqlite_foreign_keys
from src.main import app
from src.models import TaskPriority, TaskStatus
from src.services import TagInput, TaskService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Async engine для тестовой БД (SQLite in-memory).

    StaticPool: одно и то же соединение, иначе in-memory данные теряются.
    Таблицы создаются заново для каждого теста.
    """
    from src.models import Base

    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(test_session_factory):
    """Async session для работы с тестовой БД."""
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(test_session_factory):
    """
    HTTP клиент для тестирования API endpoints.

    get_db подменяется на сессию тестовой БД.
    """

    async def override_get_db():
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_task(test_db):
    """
    Фабрика задач.

    Пример:
        task = await make_task("write tests", tags=["python"])
    """

    async def _make_task(
        name: str,
        title: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.TODO,
        tags: list[str] | None = None,
    ):
        service = TaskService(test_db)
        return await service.create_task(
            title=title or f"Title of {name}",
            name=name,
            priority=priority,
            status=status,
            tags=[TagInput(name=t) for t in tags or []],
        )

    return _make_task
