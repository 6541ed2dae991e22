"""
API endpoints для работы с тегами.

Теги создаются вместе с задачами (POST /tasks/create), здесь только
просмотр и удаление.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status

from ..services import TagService
from .dependencies import get_tag_service
from .schemas import (
    ErrorEnvelope,
    StatusEnvelope,
    TagDetailResponse,
    TagEnvelope,
    TagListEnvelope,
    TagView,
)

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get(
    "",
    response_model=TagListEnvelope,
    summary="Получить список тегов",
    description="Страница тегов по имени. total ≤ 0 → 5, page ≤ 0 → первая страница.",
    responses={404: {"model": ErrorEnvelope, "description": "Пустой список"}},
)
async def get_tags(
    page: int = Query(0, description="Номер страницы"),
    total: int = Query(5, description="Размер страницы"),
    service: TagService = Depends(get_tag_service),
) -> TagListEnvelope:
    tags = await service.list_tags(page=page, total=total)
    return TagListEnvelope(
        status_code=status.HTTP_200_OK,
        message=f"Get {len(tags)} tags successfully",
        data=[TagView.model_validate(t) for t in tags],
    )


@router.get(
    "/{tag_id}",
    response_model=TagEnvelope,
    summary="Получить тег по ID",
    description="Тег вместе с задачами, к которым он привязан.",
    responses={404: {"model": ErrorEnvelope, "description": "Тег не найден"}},
)
async def get_tag(tag_id: uuid.UUID, service: TagService = Depends(get_tag_service)) -> TagEnvelope:
    tag = await service.get_tag(tag_id)
    return TagEnvelope(
        status_code=status.HTTP_200_OK,
        message="Get tag successfully",
        data=TagDetailResponse.model_validate(tag),
    )


@router.delete(
    "/{tag_id}",
    response_model=StatusEnvelope,
    summary="Удалить тег",
    description="Удаляет тег и его связи с задачами. Задачи остаются.",
    responses={
        400: {"model": ErrorEnvelope, "description": "Ошибка сохранения"},
        404: {"model": ErrorEnvelope, "description": "Тег не найден"},
    },
)
async def delete_tag(
    tag_id: uuid.UUID, service: TagService = Depends(get_tag_service)
) -> StatusEnvelope:
    await service.delete_tag(tag_id)
    return StatusEnvelope(status_code=status.HTTP_200_OK, message="Delete tag successfully")
