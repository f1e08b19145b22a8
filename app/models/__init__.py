"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 (Dashboard users with role strings)
    token: 리프레시 토큰 (Refresh tokens)
    post: 게시물, 미디어, 카드 블록 (Posts, media, card blocks)
    invitation: 초대 (Invitations)
"""

from app.models.user import User
from app.models.token import RefreshToken
from app.models.post import Post, PostMedia, PostCardBlock
from app.models.invitation import Invitation

__all__ = [
    "User",
    "RefreshToken",
    "Post", "PostMedia", "PostCardBlock",
    "Invitation",
]
