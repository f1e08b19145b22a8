"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더 또는 세션 쿠키를 전송
       (Client sends a Bearer header or the HttpOnly session cookie)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환 (type == "access")
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
    4. get_current_user 는 추가로 활성 상태를 확인 (inactive → 403)

Authorization Flow (require_roles):
    1. get_current_user로 사용자 인증
    2. 사용자 역할이 허용 목록에 없으면 403 Forbidden
"""

from typing import Annotated, Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.models.user import ROLE_ADMIN, User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — 쿠키 세션도 허용하므로 auto_error=False
# (Cookie sessions are accepted too, so a missing header is not an error here)
security: HTTPBearer = HTTPBearer(auto_error=False)


def _session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_session_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """세션 토큰에서 사용자를 조회합니다 — 활성 여부는 확인하지 않음.

    Resolve the session user from the Bearer header or session cookie.

    Raises:
        UnauthorizedError(401): 토큰 없음, 유효하지 않음, 만료, 사용자 없음
    """
    token = _session_token(request, credentials)
    if not token:
        raise UnauthorizedError("Authentication required")

    try:
        payload: dict = decode_token(token)
        # 토큰 타입 검증 — Reject refresh tokens used as access tokens
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


async def get_current_user(
    user: Annotated[User, Depends(get_session_user)],
) -> User:
    """활성 사용자만 허용 — Inactive accounts get 403 on dashboard endpoints."""
    if not user.is_active:
        raise ForbiddenError("Account is inactive")
    return user


def require_roles(*roles: str) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Args:
        roles: 허용 역할 목록 (Allowed role names)

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
    """
    allowed = frozenset(roles)

    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return current_user
    return _check


# 관리자 전용 의존성 — Admin-only dependency
require_admin = require_roles(ROLE_ADMIN)
