"""JWT 세션 토큰 생성 및 검증 유틸리티 모듈.

JWT session token creation and verification utility module.

JWT Payload Structure:
    액세스/리프레시 토큰 모두 동일한 세션 페이로드를 사용합니다.
    Both access and refresh tokens carry the same session payload:
    {
        "sub": "user_uuid",          # 사용자 ID (User identifier)
        "email": "a@example.com",    # 로그인 이메일 (Login email)
        "name": "Jane",              # 표시 이름 (Display name, may be null)
        "role": "editor",            # 역할 (admin | editor | author)
        "is_active": true,           # 계정 활성 상태 (Account active flag)
        "exp": 1234567890,           # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"|"refresh"   # 토큰 유형 (Token type discriminator)
    }
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from app.config import settings


def _encode(data: dict[str, Any], expires_in: timedelta, token_type: str) -> str:
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + expires_in
    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(data: dict[str, Any]) -> str:
    """JWT 액세스(세션) 토큰을 생성합니다.

    Generate a session access token.
    Expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES (default: 30 min).

    Args:
        data: 세션 페이로드 (Session payload, see module docstring)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    return _encode(data, timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES), "access")


def create_refresh_token(data: dict[str, Any]) -> str:
    """JWT 리프레시 토큰을 생성합니다.

    Generate a refresh token. Expires after JWT_REFRESH_TOKEN_EXPIRE_DAYS.
    A random ``jti`` keeps tokens issued within the same second distinct.
    """
    payload: dict[str, Any] = {**data, "jti": secrets.token_hex(8)}
    return _encode(payload, timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS), "refresh")


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a JWT token string.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
