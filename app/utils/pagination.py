"""Page windows over async SQLAlchemy selects."""

import json
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


@dataclass(frozen=True)
class MetaData:
    """Pagination metadata returned alongside a page of results."""

    current_page: int
    total_pages: int
    page_size: int
    total_count: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @classmethod
    def from_count(cls, count: int, page_number: int, page_size: int) -> "MetaData":
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        return cls(
            current_page=page_number,
            total_pages=math.ceil(count / float(page_size)),
            page_size=page_size,
            total_count=count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }

    def to_header(self) -> str:
        """Serialized form for the ``X-Pagination`` response header."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


def page_offset(page_number: int, page_size: int) -> int:
    return (page_number - 1) * page_size


@dataclass(frozen=True)
class PagedList(Generic[T]):
    items: list[T]
    meta_data: MetaData

    @property
    def exceeds_last_page(self) -> bool:
        """True when the requested page lies past the last non-empty page."""
        return self.meta_data.total_pages > 0 and self.meta_data.current_page > self.meta_data.total_pages

    @classmethod
    async def create(
        cls,
        session: AsyncSession,
        stmt: Select,
        page_number: int,
        page_size: int,
        options: Sequence[Any] = (),
    ) -> "PagedList":
        """Count rows of ``stmt`` and load the requested window.

        ``options`` are loader options applied to the item query only.
        """
        count_result = await session.execute(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        count = count_result.scalar() or 0

        result = await session.execute(
            stmt.options(*options)
            .offset(page_offset(page_number, page_size))
            .limit(page_size)
        )
        items = list(result.scalars().all())
        return cls(items=items, meta_data=MetaData.from_count(count, page_number, page_size))
