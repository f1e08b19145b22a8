"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
Role-based access control uses a fixed set of role strings stored on the user.

Tables:
    - users: 대시보드 계정 (Dashboard accounts, unique email)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 역할 — Role names, highest authority first
ROLE_ADMIN: str = "admin"
ROLE_EDITOR: str = "editor"
ROLE_AUTHOR: str = "author"
ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_EDITOR, ROLE_AUTHOR)


class User(Base):
    """사용자 모델 — 대시보드 계정 정보.

    User model — Dashboard account information.
    Email is the login identifier and is globally unique.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, unique)
        name: 표시 이름 (Display name, optional)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 역할 (admin | editor | author)
        is_active: 활성 상태 (Inactive accounts can sign in but not use the dashboard)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        posts: 작성한 게시물 (Authored posts)
        refresh_tokens: 리프레시 토큰 목록 (Active refresh tokens, cascade delete)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 표시 이름 — Display name (optional, 초대 수락 시 입력)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 역할 — Role string (admin > editor > author)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_AUTHOR)
    # 활성 상태 — Whether the account may use the dashboard
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    posts = relationship("Post", back_populates="author")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    @property
    def display_name(self) -> str:
        """이름이 없으면 이메일 — Name, falling back to email."""
        return self.name or self.email
