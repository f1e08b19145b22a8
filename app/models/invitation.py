"""초대 모델 — 역할이 지정된 시간 제한 가입 토큰.

Invitation model — A time-limited token granting account creation
with a preset role. One open invitation per email.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Invitation(Base):
    """초대 테이블.

    Invitation table.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        email: 초대 대상 이메일 (Invitee email, unique)
        role: 가입 시 부여할 역할 (Role granted on acceptance)
        token: 초대 토큰, 64자 hex (Invite token, 64 hex chars, unique)
        expires_at: 만료 일시 (Expiration timestamp)
        used: 사용 여부 (Whether the invitation was accepted)
        created_at: 생성 일시 (Creation timestamp)
    """

    __tablename__ = "invitations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    token: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
