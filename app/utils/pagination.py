"""페이지네이션 유틸리티 모듈.

Pagination helpers for SQLAlchemy async list queries (posts list).
"""

import math
from typing import Any, Sequence

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

MAX_PER_PAGE: int = 100


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (ceil(total / per_page))
    """

    items: list[Any]
    total: int
    page: int
    per_page: int
    pages: int


def page_count(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if per_page > 0 else 0


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Runs a COUNT over the query as a subquery, then fetches one page
    with OFFSET/LIMIT. ``per_page`` is capped at ``MAX_PER_PAGE``.

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수)
    """
    per_page = min(max(per_page, 1), MAX_PER_PAGE)
    page = max(page, 1)

    count_query = select(func.count()).select_from(query.subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    result = await db.execute(query.offset((page - 1) * per_page).limit(per_page))
    return result.scalars().all(), total
