"""게시물 서비스 — 게시물 CRUD 및 렌더링 비즈니스 로직.

Post Service — Business logic for post CRUD and rendering.
Editor HTML is cleaned by ``content_service.prepare_content`` before
storage; the media and card blocks it yields are stored with the post.

Permissions:
    - admin/editor: 모든 게시물 수정/삭제 (Any post)
    - author: 본인이 작성한 게시물만 (Own posts only)
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import POST_STATUS_DRAFT, POST_STATUSES, Post
from app.models.user import ROLE_ADMIN, ROLE_EDITOR, User
from app.repositories.post_repository import post_repository
from app.schemas.post import (
    CardBlockInput,
    CardBlockResponse,
    PostCreate,
    PostListItem,
    PostListPage,
    PostMediaInput,
    PostMediaResponse,
    PostResponse,
    PostUpdate,
    RenderedPostResponse,
)
from app.services.card_service import card_service
from app.services.content_service import prepare_content, render_post, slugify
from app.utils.exceptions import BadRequestError, DuplicateError, ForbiddenError, NotFoundError
from app.utils.logger import logger
from app.utils.pagination import MAX_PER_PAGE, page_count, paginate


def normalize_status(value: str) -> str:
    """상태 값을 저장 형식(대문자)으로 변환 — 대소문자 무시.

    Raises:
        BadRequestError: DRAFT/PUBLISHED/ARCHIVED 가 아닌 값
    """
    status = value.strip().upper()
    if status not in POST_STATUSES:
        raise BadRequestError("Invalid status value")
    return status


def media_to_response(item: Any) -> PostMediaResponse:
    return PostMediaResponse(
        id=str(item.id),
        post_id=str(item.post_id) if item.post_id else None,
        url=item.url,
        type=item.type,
        alt=item.alt or "",
        created_at=item.created_at,
    )


def _media_dicts(items: list[PostMediaInput]) -> list[dict[str, Any]]:
    return [item.model_dump() for item in items]


def _card_block_dicts(items: list[CardBlockInput]) -> list[dict[str, Any]]:
    return [
        {"card_id": item.card_id, "position": index if item.position is None else item.position}
        for index, item in enumerate(items)
    ]


class PostService:
    """게시물 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, post: Post) -> PostResponse:
        """게시물 모델을 상세 응답으로 변환 — media/card_blocks/author 로드 필요."""
        return PostResponse(
            id=str(post.id),
            title=post.title,
            slug=post.slug,
            content=post.content,
            excerpt=post.excerpt,
            status=post.status,
            meta_title=post.meta_title,
            meta_description=post.meta_description,
            feature_image=post.feature_image,
            feature_image_alt=post.feature_image_alt,
            author_id=str(post.author_id) if post.author_id else None,
            author_name=post.author.display_name if post.author else None,
            media=[media_to_response(m) for m in post.media],
            card_blocks=[
                CardBlockResponse(id=str(b.id), card_id=b.card_id, position=b.position)
                for b in post.card_blocks
            ],
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def _check_can_edit(self, post: Post, user: User) -> None:
        if user.role in (ROLE_ADMIN, ROLE_EDITOR):
            return
        if post.author_id != user.id:
            raise ForbiddenError("You can only modify your own posts")

    async def _get_post(self, db: AsyncSession, post_id: UUID) -> Post:
        post: Post | None = await post_repository.get_detail(db, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def _ensure_unique_slug(
        self,
        db: AsyncSession,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> None:
        if await post_repository.slug_exists(db, slug, exclude_id):
            raise DuplicateError("Slug already exists")

    async def list_posts(
        self,
        db: AsyncSession,
        status: str | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> PostListPage:
        """게시물 목록 — 최신순, 선택적 상태 필터. 상태는 소문자로 노출."""
        stored_status = normalize_status(status) if status else None
        items, total = await paginate(db, post_repository.list_query(stored_status), page, per_page)
        per_page = min(max(per_page, 1), MAX_PER_PAGE)
        return PostListPage(
            items=[
                PostListItem(
                    id=str(p.id),
                    title=p.title,
                    slug=p.slug,
                    status=p.status.lower(),
                    created_at=p.created_at,
                    updated_at=p.updated_at,
                )
                for p in items
            ],
            total=total,
            page=max(page, 1),
            per_page=per_page,
            pages=page_count(total, per_page),
        )

    async def get_post(self, db: AsyncSession, post_id: UUID) -> PostResponse:
        return self._to_response(await self._get_post(db, post_id))

    async def get_post_by_slug(self, db: AsyncSession, slug: str) -> PostResponse:
        post: Post | None = await post_repository.get_by_slug(db, slug)
        if post is None:
            raise NotFoundError("Post not found")
        return self._to_response(post)

    async def create_post(
        self,
        db: AsyncSession,
        data: PostCreate,
        author: User,
    ) -> PostResponse:
        """게시물을 생성합니다.

        - 슬러그 미지정 시 제목으로 생성 (Slug generated from the title)
        - 요약/메타 설명 미지정 시 본문에서 생성 (Excerpt defaults from content)
        - 미디어/카드 블록 미지정 시 본문에서 추출 (Derived from content)

        Raises:
            BadRequestError: 잘못된 상태 값
            DuplicateError: 슬러그 중복
        """
        prepared = prepare_content(data.content)
        slug = (data.slug or "").strip() or slugify(data.title)
        await self._ensure_unique_slug(db, slug)

        excerpt = data.excerpt if data.excerpt is not None else prepared.excerpt
        post: Post = await post_repository.create(db, {
            "title": data.title,
            "slug": slug,
            "content": prepared.content,
            "excerpt": excerpt,
            "status": normalize_status(data.status) if data.status else POST_STATUS_DRAFT,
            "meta_title": data.meta_title or data.title,
            "meta_description": data.meta_description or prepared.excerpt,
            "feature_image": data.feature_image,
            "feature_image_alt": data.feature_image_alt,
            "author_id": author.id,
        })

        media = _media_dicts(data.media) if data.media is not None else prepared.media
        card_blocks = (
            _card_block_dicts(data.card_blocks) if data.card_blocks is not None else prepared.card_blocks
        )
        await post_repository.replace_children(db, post, media, card_blocks)

        logger.info(
            "Post {} created by {} ({} media, {} card blocks)",
            slug, author.email, len(media), len(card_blocks),
        )
        return self._to_response(await self._get_post(db, post.id))

    async def update_post(
        self,
        db: AsyncSession,
        post_id: UUID,
        data: PostUpdate,
        user: User,
    ) -> PostResponse:
        """게시물을 부분 수정합니다.

        본문이 바뀌면 저장된 미디어와 카드 블록을 삭제 후 재생성합니다.

        Raises:
            NotFoundError: 게시물 없음
            ForbiddenError: 타인의 게시물을 수정하는 author
            BadRequestError: 잘못된 상태 값 (Invalid status value)
            DuplicateError: 슬러그 중복
        """
        post = await self._get_post(db, post_id)
        self._check_can_edit(post, user)

        update_data: dict[str, Any] = data.model_dump(
            exclude_unset=True, exclude={"media", "card_blocks"}
        )

        if "status" in update_data:
            if update_data["status"] is None:
                raise BadRequestError("Invalid status value")
            update_data["status"] = normalize_status(update_data["status"])

        if update_data.get("slug") is not None:
            update_data["slug"] = update_data["slug"].strip()
            await self._ensure_unique_slug(db, update_data["slug"], exclude_id=post.id)
        else:
            update_data.pop("slug", None)
        if "title" in update_data and update_data["title"] is None:
            update_data.pop("title")

        media: list[dict[str, Any]] | None = None
        card_blocks: list[dict[str, Any]] | None = None
        if update_data.get("content") is not None:
            prepared = prepare_content(update_data["content"])
            update_data["content"] = prepared.content
            update_data.setdefault("excerpt", prepared.excerpt)
            media, card_blocks = prepared.media, prepared.card_blocks
        else:
            update_data.pop("content", None)

        if data.media is not None:
            media = _media_dicts(data.media)
        if data.card_blocks is not None:
            card_blocks = _card_block_dicts(data.card_blocks)

        if media is not None or card_blocks is not None:
            await post_repository.replace_children(
                db,
                post,
                media if media is not None else [
                    {"url": m.url, "type": m.type, "alt": m.alt} for m in post.media
                ],
                card_blocks if card_blocks is not None else [
                    {"card_id": b.card_id, "position": b.position} for b in post.card_blocks
                ],
            )

        if update_data:
            await post_repository.update(db, post, update_data)

        logger.info("Post {} updated by {}: {}", post_id, user.email, sorted(update_data))
        return self._to_response(await self._get_post(db, post_id))

    async def delete_post(
        self,
        db: AsyncSession,
        post_id: UUID,
        user: User,
    ) -> None:
        """게시물 삭제 — 미디어와 카드 블록도 함께 삭제 (cascade)."""
        post = await self._get_post(db, post_id)
        self._check_can_edit(post, user)
        await post_repository.delete(db, post)
        logger.info("Post {} deleted by {}", post_id, user.email)

    async def _render(self, post: Post) -> RenderedPostResponse:
        blocks = await render_post(post, card_service.get_card)
        return RenderedPostResponse(id=str(post.id), title=post.title, slug=post.slug, blocks=blocks)

    async def render(self, db: AsyncSession, post_id: UUID) -> RenderedPostResponse:
        """게시물을 HTML/카드 블록 목록으로 렌더링합니다."""
        return await self._render(await self._get_post(db, post_id))

    async def render_by_slug(self, db: AsyncSession, slug: str) -> RenderedPostResponse:
        post: Post | None = await post_repository.get_by_slug(db, slug)
        if post is None:
            raise NotFoundError("Post not found")
        return await self._render(post)


# 싱글턴 인스턴스 — Singleton instance
post_service: PostService = PostService()
