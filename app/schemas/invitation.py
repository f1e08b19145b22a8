"""초대 관련 Pydantic 요청/응답 스키마 정의.

Invitation request/response schema definitions.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from app.schemas.auth import EMAIL_PATTERN


class InvitationCreate(BaseModel):
    """초대 생성 요청 스키마 (관리자 전용).

    Attributes:
        email: 초대 대상 이메일 (Invitee email)
        role: 가입 시 부여할 역할 (admin | editor | author, default author)
    """

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    role: str = "author"


class InvitationResponse(BaseModel):
    """초대 응답 스키마 — 관리자 목록/생성 결과."""

    id: str
    email: str
    role: str
    token: str
    invite_url: str  # {APP_URL}/join/{token}
    expires_at: datetime
    used: bool
    created_at: datetime


class InvitationCreateResponse(InvitationResponse):
    """초대 생성 결과 — 이메일 발송 여부 포함."""

    email_sent: bool


class InvitationVerifyResponse(BaseModel):
    """공개 초대 확인 응답 — GET /invitations/{token}."""

    valid: bool
    email: str
    role: str


class InvitationAccept(BaseModel):
    """초대 수락 요청 — 이름과 비밀번호 (8자 이상)."""

    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8, max_length=100)
