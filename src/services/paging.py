"""Pagination and sorting parameters shared by list operations."""

from dataclasses import dataclass

from ..core.config import settings
from ..core.exceptions import InvalidArgumentError

SORT_ORDERS = ("ASC", "DESC")

# OFFSET/LIMIT передаются в БД как 64-битное целое
MAX_ROW_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class Page:
    """Resolved page window: skip = page * size, take = size."""

    skip: int
    limit: int

    @classmethod
    def resolve(cls, page: int, total: int) -> "Page":
        """
        Нормализовать параметры пагинации.

        - total <= 0 -> размер страницы по умолчанию (5)
        - page <= 0  -> первая страница (skip = 0)

        Raises:
            InvalidArgumentError: skip или limit не помещается в 64-битное целое

        Пример:
            Page.resolve(page=2, total=10)  # Page(skip=20, limit=10)
            Page.resolve(page=-1, total=0)  # Page(skip=0, limit=5)
        """
        limit = total if total > 0 else settings.DEFAULT_PAGE_SIZE
        index = page if page > 0 else 0
        skip = index * limit

        if limit > MAX_ROW_OFFSET:
            raise InvalidArgumentError(
                "Total is too large",
                details=[{"field": "total", "message": f"Must be at most {MAX_ROW_OFFSET}"}],
            )
        if skip > MAX_ROW_OFFSET:
            raise InvalidArgumentError(
                "Page is too large",
                details=[{"field": "page", "message": "page * total exceeds the row range"}],
            )

        return cls(skip=skip, limit=limit)


@dataclass(frozen=True)
class Sort:
    """Validated sort field (lowercase) and direction."""

    field: str
    descending: bool

    @classmethod
    def parse(cls, sort_by: str | None, sort_order: str | None) -> "Sort":
        """
        Проверить и нормализовать параметры сортировки.

        Raises:
            InvalidArgumentError: sort_order не ASC/DESC или sort_by пустой
        """
        order = (sort_order or "").strip().upper()
        if order not in SORT_ORDERS:
            raise InvalidArgumentError(
                "SortOrder only accepts ASC or DESC value",
                details=[{"field": "sortOrder", "message": f"Got '{sort_order}'"}],
            )

        field = (sort_by or "").strip().lower()
        if not field:
            raise InvalidArgumentError(
                "SortBy cannot be null or empty",
                details=[{"field": "sortBy", "message": "Value is required"}],
            )

        return cls(field=field, descending=order == "DESC")
