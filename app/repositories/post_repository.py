"""게시물 레포지토리 — 게시물, 본문 미디어, 카드 블록 쿼리.

Post Repository — Queries for posts and the media/card blocks
derived from their bodies. Detail reads eager-load both child
collections (lazy loading is unavailable under AsyncSession).
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.post import Post, PostCardBlock, PostMedia
from app.repositories.base import BaseRepository


def _with_children(query: Select) -> Select:
    # populate_existing — 교체된 자식 컬렉션을 다시 읽음 (Reload replaced child collections)
    return query.options(
        selectinload(Post.media),
        selectinload(Post.card_blocks),
        selectinload(Post.author),
    ).execution_options(populate_existing=True)


class PostRepository(BaseRepository[Post]):
    """게시물 테이블 쿼리 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Post)

    def list_query(self, status: str | None = None) -> Select:
        """목록 쿼리 — Newest first, optionally filtered by stored status."""
        query: Select = select(Post).order_by(Post.created_at.desc())
        if status is not None:
            query = query.where(Post.status == status)
        return query

    async def get_detail(
        self,
        db: AsyncSession,
        post_id: UUID,
    ) -> Post | None:
        """ID로 게시물을 미디어/카드 블록과 함께 조회합니다."""
        result = await db.execute(_with_children(select(Post).where(Post.id == post_id)))
        return result.scalar_one_or_none()

    async def get_by_slug(
        self,
        db: AsyncSession,
        slug: str,
    ) -> Post | None:
        """슬러그로 게시물을 미디어/카드 블록과 함께 조회합니다."""
        result = await db.execute(_with_children(select(Post).where(Post.slug == slug)))
        return result.scalar_one_or_none()

    async def slug_exists(
        self,
        db: AsyncSession,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        query: Select = select(func.count()).select_from(Post).where(Post.slug == slug)
        if exclude_id is not None:
            query = query.where(Post.id != exclude_id)
        return ((await db.execute(query)).scalar() or 0) > 0

    async def replace_children(
        self,
        db: AsyncSession,
        post: Post,
        media: list[dict[str, Any]],
        card_blocks: list[dict[str, Any]],
    ) -> None:
        """본문 미디어와 카드 블록을 새 목록으로 교체합니다.

        Replace a post's body media and card blocks.
        Existing rows are deleted first; new rows get their list index as position.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            post: 대상 게시물 (Target post)
            media: [{url, type, alt}] 문서 순서 (In document order)
            card_blocks: [{card_id, position}] 문서 순서 (In document order)
        """
        await db.execute(delete(PostMedia).where(PostMedia.post_id == post.id))
        await db.execute(delete(PostCardBlock).where(PostCardBlock.post_id == post.id))
        # 로드된 컬렉션은 삭제된 행을 가리킴 — loaded collections now point at deleted rows
        db.expire(post, ["media", "card_blocks"])

        for index, item in enumerate(media):
            db.add(PostMedia(
                post_id=post.id,
                url=item["url"],
                type=item["type"],
                alt=item.get("alt") or "",
                position=index,
            ))
        for index, block in enumerate(card_blocks):
            db.add(PostCardBlock(
                post_id=post.id,
                card_id=block["card_id"],
                position=block.get("position", index),
            ))
        await db.flush()

    async def count_by_status(self, db: AsyncSession) -> dict[str, int]:
        """상태별 게시물 수 — Post counts grouped by stored status."""
        result = await db.execute(select(Post.status, func.count()).group_by(Post.status))
        return {status: count for status, count in result.all()}

    async def count_created_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> int:
        query: Select = select(func.count()).select_from(Post).where(
            Post.created_at >= start, Post.created_at < end
        )
        return (await db.execute(query)).scalar() or 0

    async def get_recently_updated(
        self,
        db: AsyncSession,
        limit: int = 5,
    ) -> Sequence[Post]:
        """최근 수정된 게시물 (작성자 포함) — Recently updated posts with authors."""
        query: Select = (
            select(Post)
            .options(selectinload(Post.author))
            .order_by(Post.updated_at.desc())
            .limit(limit)
        )
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
post_repository: PostRepository = PostRepository()
