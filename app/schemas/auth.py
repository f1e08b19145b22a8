"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, registration, token issuance/refresh, session info,
and the one-time superadmin bootstrap.
"""

from pydantic import BaseModel, Field

# 이메일 형식 검증 패턴 — Basic email shape check
EMAIL_PATTERN: str = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class LoginRequest(BaseModel):
    """대시보드 로그인 요청 스키마.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    email: str  # 로그인 이메일 — 대소문자 무시 (Case-insensitive)
    password: str  # 비밀번호 — 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)


class RegisterRequest(BaseModel):
    """자가 회원가입 요청 스키마.

    Self-registration request schema. New accounts get the ``author`` role.
    """

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=8, max_length=100)  # 8~100자
    name: str | None = Field(default=None, max_length=255)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after successful login or token refresh. The access token is
    also set as an HttpOnly session cookie.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str  # JWT 액세스 토큰 — 만료: 30분 기본 (Access token, default TTL: 30min)
    refresh_token: str  # JWT 리프레시 토큰 — 만료: 7일 기본 (Refresh token, default TTL: 7 days)
    token_type: str = "bearer"  # 토큰 유형 — 항상 "bearer" (Token type for Authorization header)


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마 — Exchange a refresh token for a new pair."""

    refresh_token: str  # 기존 리프레시 토큰 (Current refresh token)


class LogoutRequest(BaseModel):
    """로그아웃 요청 스키마 — 리프레시 토큰 없이도 쿠키는 삭제됩니다."""

    refresh_token: str | None = None


class SessionResponse(BaseModel):
    """현재 세션 사용자 응답 스키마 (GET /auth/me).

    Attributes:
        id: 사용자 UUID (User unique identifier)
        email: 로그인 이메일 (Login email)
        name: 표시 이름 (Display name, nullable)
        role: 역할 (admin | editor | author)
        is_active: 활성 상태 (False → dashboard endpoints answer 403)
    """

    id: str
    email: str
    name: str | None
    role: str
    is_active: bool


class SuperadminRequest(BaseModel):
    """슈퍼관리자 부트스트랩 요청 스키마.

    Only the address configured as SUPERADMIN_EMAIL is accepted.
    """

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=8, max_length=100)
    name: str | None = Field(default=None, max_length=255)


class SuperadminResponse(BaseModel):
    """슈퍼관리자 부트스트랩 결과 — created | promoted | exists."""

    status: str
    message: str
    user: SessionResponse
