"""
Тесты для Repository Layer.

Проверяем:
- Upsert тегов (создание / переименование / пустой id)
- Сортировку и пагинацию задач
- Фильтры
- Удаление вместе со связями task_tags
"""

import uuid

import pytest

from src.models import EMPTY_ID, Tag, Task, TaskPriority, TaskStatus, TaskTag
from src.repositories import TagRepository, TaskRepository, TaskTagRepository


async def _create_task(db, name: str, **kwargs) -> Task:
    repo = TaskRepository(db)
    task = await repo.create(
        Task(
            title=kwargs.get("title", f"Title {name}"),
            name=name,
            priority=kwargs.get("priority", TaskPriority.MEDIUM),
            status=kwargs.get("status", TaskStatus.TODO),
        )
    )
    return task


# ============================================================================
# TAG REPOSITORY TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_tag_upsert_without_id_generates_one(test_db):
    """Test: тег без id создаётся с новым UUID."""
    repo = TagRepository(test_db)

    tag = await repo.upsert(None, "backend")
    await test_db.commit()

    assert tag.id is not None
    assert tag.id != EMPTY_ID
    assert tag.name == "backend"


@pytest.mark.asyncio
async def test_tag_upsert_empty_id_generates_one(test_db):
    """Test: пустой UUID считается отсутствующим id."""
    repo = TagRepository(test_db)

    first = await repo.upsert(EMPTY_ID, "one")
    second = await repo.upsert(EMPTY_ID, "two")
    await test_db.commit()

    assert first.id != EMPTY_ID
    assert second.id != EMPTY_ID
    assert first.id != second.id
    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_tag_upsert_keeps_supplied_id(test_db):
    """Test: неизвестный id используется для нового тега."""
    repo = TagRepository(test_db)
    tag_id = uuid.uuid4()

    tag = await repo.upsert(tag_id, "python")
    await test_db.commit()

    assert tag.id == tag_id
    found = await repo.get_by_id(tag_id)
    assert found is not None
    assert found.name == "python"


@pytest.mark.asyncio
async def test_tag_upsert_renames_existing(test_db):
    """Test: существующий тег переименовывается, новый не создаётся."""
    repo = TagRepository(test_db)
    tag = await repo.create(Tag(name="old"))
    await test_db.commit()

    renamed = await repo.upsert(tag.id, "new")
    await test_db.commit()

    assert renamed.id == tag.id
    assert renamed.name == "new"
    assert await repo.count() == 1


@pytest.mark.asyncio
async def test_tag_get_page_sorted_by_name(test_db):
    """Test: страница тегов отсортирована по имени."""
    repo = TagRepository(test_db)
    for name in ["gamma", "alpha", "beta"]:
        await repo.create(Tag(name=name))
    await test_db.commit()

    first_page = await repo.get_page(skip=0, limit=2)
    second_page = await repo.get_page(skip=2, limit=2)

    assert [t.name for t in first_page] == ["alpha", "beta"]
    assert [t.name for t in second_page] == ["gamma"]


@pytest.mark.asyncio
async def test_tag_names_are_not_unique(test_db):
    """Test: два тега с одинаковым именем допустимы."""
    repo = TagRepository(test_db)
    await repo.create(Tag(name="dup"))
    await repo.create(Tag(name="dup"))
    await test_db.commit()

    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_tag_delete_removes_associations(test_db):
    """Test: удаление тега удаляет его связи, задача остаётся."""
    tag_repo = TagRepository(test_db)
    link_repo = TaskTagRepository(test_db)

    task = await _create_task(test_db, "task")
    tag = await tag_repo.create(Tag(name="urgent"))
    await link_repo.link(task.id, tag.id)
    await test_db.commit()

    deleted = await tag_repo.delete(tag.id)
    await test_db.commit()

    assert deleted is True
    assert await link_repo.count() == 0
    assert await TaskRepository(test_db).exists(task.id)


# ============================================================================
# TASK REPOSITORY TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_task_create_and_get_full(test_db):
    """Test: задача загружается вместе с тегами (по имени)."""
    tag_repo = TagRepository(test_db)
    link_repo = TaskTagRepository(test_db)
    repo = TaskRepository(test_db)

    task = await _create_task(test_db, "with tags")
    for name in ["zeta", "alpha"]:
        tag = await tag_repo.create(Tag(name=name))
        await link_repo.link(task.id, tag.id)
    await test_db.commit()

    found = await repo.get_by_id_full(task.id)

    assert found is not None
    assert found.name == "with tags"
    assert [t.name for t in found.tags] == ["alpha", "zeta"]


@pytest.mark.asyncio
async def test_task_get_page_sort_by_name(test_db):
    """Test: сортировка по имени в обе стороны."""
    for name in ["banana", "apple", "cherry"]:
        await _create_task(test_db, name)
    await test_db.commit()
    repo = TaskRepository(test_db)

    asc = await repo.get_page(sort_by="name", descending=False, skip=0, limit=10)
    desc = await repo.get_page(sort_by="name", descending=True, skip=0, limit=10)

    assert [t.name for t in asc] == ["apple", "banana", "cherry"]
    assert [t.name for t in desc] == ["cherry", "banana", "apple"]


@pytest.mark.asyncio
async def test_task_get_page_sort_by_status_and_priority(test_db):
    """Test: status/priority сортируются по хранимым именам enum."""
    await _create_task(test_db, "a", status=TaskStatus.TODO, priority=TaskPriority.MEDIUM)
    await _create_task(test_db, "b", status=TaskStatus.DONE, priority=TaskPriority.HIGH)
    await _create_task(test_db, "c", status=TaskStatus.CANCELLED, priority=TaskPriority.LOW)
    await _create_task(test_db, "d", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.LOW)
    await test_db.commit()
    repo = TaskRepository(test_db)

    by_status_asc = await repo.get_page(sort_by="status", descending=False, limit=10)
    by_status_desc = await repo.get_page(sort_by="status", descending=True, limit=10)
    by_priority_asc = await repo.get_page(sort_by="priority", descending=False, limit=10)
    by_priority_desc = await repo.get_page(sort_by="priority", descending=True, limit=10)

    assert [t.name for t in by_status_asc] == ["c", "b", "d", "a"]
    assert [t.name for t in by_status_desc] == ["a", "d", "b", "c"]
    assert [t.priority for t in by_priority_asc] == [
        TaskPriority.HIGH,
        TaskPriority.LOW,
        TaskPriority.LOW,
        TaskPriority.MEDIUM,
    ]
    assert [t.priority for t in by_priority_desc] == [
        TaskPriority.MEDIUM,
        TaskPriority.LOW,
        TaskPriority.LOW,
        TaskPriority.HIGH,
    ]


@pytest.mark.asyncio
async def test_task_get_page_unknown_field_sorts_by_id(test_db):
    """Test: неизвестное поле сортировки -> сортировка по id."""
    created = [await _create_task(test_db, name) for name in ["c", "a", "b"]]
    await test_db.commit()
    repo = TaskRepository(test_db)

    tasks = await repo.get_page(sort_by="unknown", descending=False, skip=0, limit=10)

    assert [t.id for t in tasks] == sorted(t.id for t in created)


@pytest.mark.asyncio
async def test_task_get_page_pagination(test_db):
    """Test: skip/limit применяются после сортировки."""
    for i in range(5):
        await _create_task(test_db, f"task-{i}")
    await test_db.commit()
    repo = TaskRepository(test_db)

    page = await repo.get_page(sort_by="name", skip=2, limit=2)

    assert [t.name for t in page] == ["task-2", "task-3"]


@pytest.mark.asyncio
async def test_task_get_filtered(test_db):
    """Test: фильтры по статусу, приоритету, тегу и тексту."""
    tag_repo = TagRepository(test_db)
    link_repo = TaskTagRepository(test_db)

    done = await _create_task(test_db, "deploy", status=TaskStatus.DONE)
    urgent = await _create_task(test_db, "fix login", priority=TaskPriority.HIGH)
    await _create_task(test_db, "write docs", title="Documentation")

    tag = await tag_repo.create(Tag(name="backend"))
    await link_repo.link(urgent.id, tag.id)
    await test_db.commit()

    repo = TaskRepository(test_db)

    by_status = await repo.get_filtered(status=TaskStatus.DONE)
    by_priority = await repo.get_filtered(priority=TaskPriority.HIGH)
    by_tag = await repo.get_filtered(tag_name="backend")
    by_search = await repo.get_filtered(search="DOCUMENT")
    combined = await repo.get_filtered(status=TaskStatus.DONE, tag_name="backend")

    assert [t.id for t in by_status] == [done.id]
    assert [t.id for t in by_priority] == [urgent.id]
    assert [t.id for t in by_tag] == [urgent.id]
    assert [t.name for t in by_search] == ["write docs"]
    assert combined == []


@pytest.mark.asyncio
async def test_task_get_filtered_search_escapes_wildcards(test_db):
    """Test: % и _ в поиске - буквальные символы, а не шаблоны LIKE."""
    await _create_task(test_db, "discount", title="50% off")
    await _create_task(test_db, "plain", title="Nothing special")
    await _create_task(test_db, "snake_case", title="Naming")
    await _create_task(test_db, "backslash", title="C:\\temp")
    await test_db.commit()
    repo = TaskRepository(test_db)

    percent = await repo.get_filtered(search="%")
    underscore = await repo.get_filtered(search="_")
    backslash = await repo.get_filtered(search="\\")

    assert [t.name for t in percent] == ["discount"]
    assert [t.name for t in underscore] == ["snake_case"]
    assert [t.name for t in backslash] == ["backslash"]


@pytest.mark.asyncio
async def test_task_delete_removes_associations(test_db):
    """Test: удаление задачи удаляет связи, тег остаётся."""
    tag_repo = TagRepository(test_db)
    link_repo = TaskTagRepository(test_db)
    repo = TaskRepository(test_db)

    task = await _create_task(test_db, "to delete")
    tag = await tag_repo.create(Tag(name="keep me"))
    await link_repo.link(task.id, tag.id)
    await test_db.commit()

    assert await repo.delete(task.id) is True
    await test_db.commit()

    assert await repo.get_by_id(task.id) is None
    assert await link_repo.count() == 0
    assert await tag_repo.exists(tag.id)


@pytest.mark.asyncio
async def test_task_delete_not_found(test_db):
    """Test: удаление несуществующей задачи возвращает False."""
    repo = TaskRepository(test_db)

    assert await repo.delete(uuid.uuid4()) is False


@pytest.mark.asyncio
async def test_task_tag_link_is_unique(test_db):
    """Test: одна и та же связь не может быть создана дважды."""
    from sqlalchemy.exc import IntegrityError

    task = await _create_task(test_db, "task")
    tag = await TagRepository(test_db).create(Tag(name="tag"))
    link_repo = TaskTagRepository(test_db)
    await link_repo.link(task.id, tag.id)

    with pytest.raises(IntegrityError):
        await link_repo.link(task.id, tag.id)


@pytest.mark.asyncio
async def test_task_tag_foreign_key_enforced(test_db):
    """Test: связь на несуществующую задачу отклоняется БД."""
    from sqlalchemy.exc import IntegrityError

    tag = await TagRepository(test_db).create(Tag(name="tag"))

    with pytest.raises(IntegrityError):
        await TaskTagRepository(test_db).create(TaskTag(task_id=uuid.uuid4(), tag_id=tag.id))
