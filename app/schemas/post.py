"""게시물 관련 Pydantic 요청/응답 스키마 정의.

Post Pydantic request/response schema definitions.
Covers post CRUD, the media/card blocks derived from a post body,
and the rendered block list.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.utils.pagination import Page


class PostMediaInput(BaseModel):
    """본문 미디어 입력 — 명시하지 않으면 본문에서 추출됩니다."""

    url: str
    type: str = Field(pattern=r"^(image|video)$")
    alt: str = ""


class CardBlockInput(BaseModel):
    """카드 블록 입력 — 명시하지 않으면 본문에서 추출됩니다."""

    card_id: str
    position: int | None = None


class PostCreate(BaseModel):
    """게시물 생성 요청 스키마.

    Post creation request schema.
    The body may still contain editor card-block divs; they are converted
    to ``[Card Block ID: X]`` placeholders before storage.

    Attributes:
        title: 제목 (Title, required)
        content: 본문 HTML (Editor HTML)
        slug: URL 슬러그 (Generated from the title when omitted)
        excerpt: 요약 (Defaults to the first 160 plain-text characters)
        status: 상태 (draft | published | archived, case-insensitive)
        meta_title: SEO 제목 (Defaults to title)
        meta_description: SEO 설명 (Defaults to excerpt)
        feature_image: 대표 이미지 URL
        feature_image_alt: 대표 이미지 alt
        media: 미디어 목록 (Explicit media; derived from content when omitted)
        card_blocks: 카드 블록 목록 (Explicit card blocks; derived when omitted)
    """

    title: str = Field(min_length=1, max_length=255)
    content: str = ""
    slug: str | None = Field(default=None, max_length=255)
    excerpt: str | None = None
    status: str | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None
    feature_image: str | None = None
    feature_image_alt: str | None = Field(default=None, max_length=255)
    media: list[PostMediaInput] | None = None
    card_blocks: list[CardBlockInput] | None = None


class PostUpdate(BaseModel):
    """게시물 수정 요청 스키마 (부분 업데이트).

    Only provided fields are updated. When ``content`` is provided the
    stored media and card blocks are rebuilt.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    excerpt: str | None = None
    status: str | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    feature_image: str | None = None
    feature_image_alt: str | None = None
    media: list[PostMediaInput] | None = None
    card_blocks: list[CardBlockInput] | None = None


class PostMediaResponse(BaseModel):
    """미디어 응답 스키마."""

    id: str
    post_id: str | None
    url: str
    type: str  # image | video
    alt: str
    created_at: datetime


class CardBlockResponse(BaseModel):
    id: str
    card_id: str
    position: int


class PostListItem(BaseModel):
    """게시물 목록 항목 — status 는 소문자 (Lower-case status)."""

    id: str
    title: str
    slug: str
    status: str
    created_at: datetime
    updated_at: datetime


class PostListPage(Page):
    """게시물 목록 페이지 응답."""

    items: list[PostListItem]


class PostResponse(BaseModel):
    """게시물 상세 응답 스키마 (미디어, 카드 블록 포함)."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: str | None
    status: str  # 저장 값 그대로 (DRAFT | PUBLISHED | ARCHIVED)
    meta_title: str | None
    meta_description: str | None
    feature_image: str | None
    feature_image_alt: str | None
    author_id: str | None
    author_name: str | None
    media: list[PostMediaResponse] = []
    card_blocks: list[CardBlockResponse] = []
    created_at: datetime
    updated_at: datetime


class RenderedPostResponse(BaseModel):
    """렌더링된 게시물 응답.

    Attributes:
        blocks: 순서가 보존된 블록 목록
            ({"type": "html", "html"} | {"type": "card", "card_id", "card"})
    """

    id: str
    title: str
    slug: str
    blocks: list[dict[str, Any]]
