"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
Covers the admin user list, per-user updates and password changes.
"""

from datetime import datetime
from pydantic import BaseModel


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호 해시는 절대 포함하지 않음.

    Attributes:
        id: 사용자 UUID (User unique identifier)
        email: 로그인 이메일 (Login email)
        name: 표시 이름 (Display name, nullable)
        role: 역할 (admin | editor | author)
        is_active: 활성 상태 (Account active status)
        created_at: 생성 일시 (Creation timestamp)
        updated_at: 수정 일시 (Last update timestamp)
    """

    id: str
    email: str
    name: str | None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    """사용자 수정 요청 스키마 (부분 업데이트).

    Only provided fields are updated.
    ``role``/``is_active`` are admin-only; users may change their own ``name``.
    """

    name: str | None = None
    role: str | None = None  # admin | editor | author — 관리자 전용 (Admin only)
    is_active: bool | None = None  # 관리자 전용 (Admin only)


class PasswordChange(BaseModel):
    """비밀번호 변경 요청 스키마 — 본인 계정만 가능.

    Both fields are required; length is checked by the service so that a
    short password yields a 400 rather than a validation error.
    """

    current_password: str | None = None
    new_password: str | None = None
