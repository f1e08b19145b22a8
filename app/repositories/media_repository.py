"""미디어 레포지토리 — 미디어 라이브러리 쿼리.

Media Repository — Library queries over every stored media item,
whether or not it is attached to a post.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.post import Post, PostMedia
from app.repositories.base import BaseRepository


class MediaRepository(BaseRepository[PostMedia]):
    """post_media 테이블 쿼리 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PostMedia)

    async def list_newest_first(
        self,
        db: AsyncSession,
        media_type: str | None = None,
    ) -> Sequence[PostMedia]:
        return await self.get_all(
            db,
            filters={"type": media_type},
            order_by=PostMedia.created_at.desc(),
        )

    async def count_created_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> int:
        query: Select = select(func.count()).select_from(PostMedia).where(
            PostMedia.created_at >= start, PostMedia.created_at < end
        )
        return (await db.execute(query)).scalar() or 0

    async def get_recent(
        self,
        db: AsyncSession,
        limit: int = 5,
    ) -> Sequence[PostMedia]:
        """최근 업로드 (게시물, 작성자 포함) — Recent items with post and author."""
        query: Select = (
            select(PostMedia)
            .options(selectinload(PostMedia.post).selectinload(Post.author))
            .order_by(PostMedia.created_at.desc())
            .limit(limit)
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
media_repository: MediaRepository = MediaRepository()
