"""Тесты для моделей и enum'ов."""

import uuid

import pytest
from sqlalchemy import insert

from src.models import EMPTY_ID, Task, TaskPriority, TaskStatus


@pytest.mark.parametrize("raw", ["high", "HIGH", "High", " high "])
def test_priority_parsing_ignores_case(raw):
    assert TaskPriority(raw) is TaskPriority.HIGH


@pytest.mark.parametrize("raw", ["in_progress", "IN_PROGRESS", "In_Progress"])
def test_status_parsing_ignores_case(raw):
    assert TaskStatus(raw) is TaskStatus.IN_PROGRESS


def test_unknown_enum_value_rejected():
    with pytest.raises(ValueError):
        TaskStatus("sleeping")

    with pytest.raises(ValueError):
        TaskPriority(3)


def test_enum_serializes_to_string():
    assert TaskPriority.LOW.value == "low"
    assert TaskStatus.DONE == "done"


def test_empty_id_is_zero_uuid():
    assert str(EMPTY_ID) == "00000000-0000-0000-0000-000000000000"


def test_enum_columns_have_server_defaults():
    """Дефолты в БД совпадают с миграцией (хранятся имена enum)."""
    columns = Task.__table__.c

    assert columns.status.server_default.arg == "TODO"
    assert columns.priority.server_default.arg == "MEDIUM"


@pytest.mark.asyncio
async def test_raw_insert_uses_server_defaults(test_db):
    """Test: INSERT без status/priority получает TODO/MEDIUM из БД."""
    task_id = uuid.uuid4()
    await test_db.execute(
        insert(Task.__table__).values(id=task_id, title="raw", name="raw insert")
    )
    await test_db.commit()

    task = await test_db.get(Task, task_id)

    assert task.status is TaskStatus.TODO
    assert task.priority is TaskPriority.MEDIUM
