"""게시물 관련 SQLAlchemy ORM 모델 정의.

Post-related SQLAlchemy ORM model definitions.
A post stores its body as HTML in which card blocks appear as
``[Card Block ID: <id>]`` placeholders; the media and card blocks
referenced by the body are stored alongside it in document order.

Tables:
    - posts: 게시물 (Blog posts, unique slug)
    - post_media: 미디어 (Images/videos; post_id is null for library-only items)
    - post_card_blocks: 카드 블록 (Card placeholders resolved at render time)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 게시물 상태 — Post status values (stored upper-case)
POST_STATUS_DRAFT: str = "DRAFT"
POST_STATUS_PUBLISHED: str = "PUBLISHED"
POST_STATUS_ARCHIVED: str = "ARCHIVED"
POST_STATUSES: tuple[str, ...] = (POST_STATUS_DRAFT, POST_STATUS_PUBLISHED, POST_STATUS_ARCHIVED)

# 미디어 유형 — Media types
MEDIA_TYPES: tuple[str, ...] = ("image", "video")


class Post(Base):
    """게시물 모델.

    Post model — Title, HTML body, publication status, and SEO metadata.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 제목 (Title)
        slug: URL 슬러그 (URL slug, unique)
        content: 본문 HTML, 카드 플레이스홀더 포함 (HTML body with card placeholders)
        excerpt: 요약 (Plain-text excerpt, max 160 chars by default)
        status: 상태 (DRAFT | PUBLISHED | ARCHIVED)
        meta_title: SEO 제목 (SEO title)
        meta_description: SEO 설명 (SEO description)
        feature_image: 대표 이미지 URL (Feature image URL or data URI)
        feature_image_alt: 대표 이미지 대체 텍스트 (Feature image alt text)
        author_id: 작성자 FK (Author, SET NULL on user delete)

    Relationships:
        author: 작성자 (Author user)
        media: 본문 미디어 (Body media in document order, cascade delete)
        card_blocks: 카드 블록 (Card blocks ordered by position, cascade delete)
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # URL 슬러그 — 전역 고유 (Globally unique)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=POST_STATUS_DRAFT, index=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    feature_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    feature_image_alt: Mapped[str | None] = mapped_column(String(255), nullable=True)
    author_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    author = relationship("User", back_populates="posts")
    media = relationship(
        "PostMedia",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostMedia.position",
    )
    card_blocks = relationship(
        "PostCardBlock",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostCardBlock.position",
    )


class PostMedia(Base):
    """게시물 미디어 모델 — 이미지 또는 비디오.

    Post media model — An image or video URL, optionally attached to a post.
    Items uploaded through the media library have no post.
    """

    __tablename__ = "post_media"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 게시물 FK — null이면 라이브러리 전용 (Null for library-only items)
    post_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    # 미디어 유형 — "image" | "video"
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    alt: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    # 본문 내 등장 순서 — Order of appearance in the post body (0 for library items)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    post = relationship("Post", back_populates="media")


class PostCardBlock(Base):
    """카드 블록 모델 — 본문 내 카드 플레이스홀더.

    Card block model — The n-th card placeholder in a post body.
    """

    __tablename__ = "post_card_blocks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    # 외부 카드 ID — External card identifier
    card_id: Mapped[str] = mapped_column(String(255), nullable=False)
    # 본문 내 등장 순서 — Order of appearance in the body (0-based)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    post = relationship("Post", back_populates="card_blocks")
