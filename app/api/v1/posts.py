"""게시물 라우터 — 게시물 CRUD 및 렌더링 엔드포인트.

Post Router — CRUD and rendering endpoints. All endpoints require an
active dashboard session; authors may only modify their own posts.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.post import (
    PostCreate,
    PostListPage,
    PostResponse,
    PostUpdate,
    RenderedPostResponse,
)
from app.services.post_service import post_service

router: APIRouter = APIRouter()


@router.get("", response_model=PostListPage)
async def list_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
    status: Annotated[str | None, Query(description="draft | published | archived")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PostListPage:
    """게시물 목록 (최신순, 상태 필터)."""
    return await post_service.list_posts(db, status, page, per_page)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    data: PostCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PostResponse:
    """게시물 생성 — 작성자는 현재 사용자."""
    result: PostResponse = await post_service.create_post(db, data, current_user)
    await db.commit()
    return result


@router.get("/slug/{slug}", response_model=PostResponse)
async def get_post_by_slug(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> PostResponse:
    return await post_service.get_post_by_slug(db, slug)


@router.get("/slug/{slug}/render", response_model=RenderedPostResponse)
async def render_post_by_slug(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> RenderedPostResponse:
    return await post_service.render_by_slug(db, slug)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> PostResponse:
    """게시물 상세 (미디어, 카드 블록 포함)."""
    return await post_service.get_post(db, post_id)


@router.get("/{post_id}/render", response_model=RenderedPostResponse)
async def render_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> RenderedPostResponse:
    """게시물 렌더링 — HTML 조각과 카드 데이터를 순서대로 반환."""
    return await post_service.render(db, post_id)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: UUID,
    data: PostUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PostResponse:
    """게시물 부분 수정."""
    result: PostResponse = await post_service.update_post(db, post_id, data, current_user)
    await db.commit()
    return result


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await post_service.delete_post(db, post_id, current_user)
    await db.commit()
    return MessageResponse(message="Post deleted")
