"""인증 서비스 — 로그인, 회원가입, 토큰 갱신, 슈퍼관리자 부트스트랩.

Auth Service — Business logic for login, registration, token refresh,
logout, the current session view and the superadmin bootstrap.
"""

from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import ROLE_ADMIN, ROLE_AUTHOR, User
from app.repositories.auth_repository import auth_repository
from app.repositories.user_repository import user_repository
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    SessionResponse,
    SuperadminRequest,
    SuperadminResponse,
    TokenResponse,
)
from app.utils.exceptions import DuplicateError, ForbiddenError, UnauthorizedError
from app.utils.jwt import create_access_token, create_refresh_token, decode_token
from app.utils.logger import logger
from app.utils.password import hash_password, verify_password
from app.utils.time import as_utc, utc_now


def to_session(user: User) -> SessionResponse:
    """사용자 모델을 세션 응답으로 변환 — Session view of a user."""
    return SessionResponse(
        id=str(user.id),
        email=user.email,
        name=user.name,
        role=user.role,
        is_active=user.is_active,
    )


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    Inactive accounts may sign in; their session carries ``is_active=False``
    and the dashboard dependencies reject them with 403.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, Any]:
        return {
            "sub": str(user.id),
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "is_active": user.is_active,
        }

    async def _generate_tokens(
        self,
        db: AsyncSession,
        user: User,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Issue an access/refresh pair. Older refresh tokens of the user are
        removed so at most one refresh token is live per account.
        """
        payload: dict[str, Any] = self._build_jwt_payload(user)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        await auth_repository.delete_user_refresh_tokens(db, user.id)

        expires_at: datetime = utc_now() + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await auth_repository.create_refresh_token(
            db, user_id=user.id, token=refresh_token, expires_at=expires_at
        )

        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> TokenResponse:
        """이메일/비밀번호 로그인을 처리합니다.

        Raises:
            UnauthorizedError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        user: User | None = await user_repository.get_by_email(db, data.email.strip())
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")

        logger.info("User {} signed in", user.email)
        return await self._generate_tokens(db, user)

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
    ) -> SessionResponse:
        """자가 회원가입 — 새 계정은 author 역할.

        Raises:
            DuplicateError: 이미 가입된 이메일 (Email already registered)
        """
        email = data.email.strip().lower()
        if await user_repository.get_by_email(db, email) is not None:
            raise DuplicateError("User already exists")

        user: User = await user_repository.create(db, {
            "email": email,
            "name": data.name,
            "password_hash": hash_password(data.password),
            "role": ROLE_AUTHOR,
        })
        logger.info("Registered user {}", user.email)
        return to_session(user)

    async def refresh_tokens(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다 (회전).

        Rejected tokens are left in place: the failed request is rolled back,
        and the user's next login replaces every stored refresh token.

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 리프레시 토큰일 때
        """
        db_token = await auth_repository.get_refresh_token(db, data.refresh_token)
        if db_token is None:
            raise UnauthorizedError("Invalid refresh token")

        if as_utc(db_token.expires_at) < utc_now():
            raise UnauthorizedError("Refresh token has expired")

        try:
            payload: dict[str, Any] = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid refresh token")

        if payload.get("type") != "refresh" or payload.get("sub") is None:
            raise UnauthorizedError("Invalid refresh token payload")

        user: User | None = await user_repository.get_by_id(db, UUID(payload["sub"]))
        if user is None:
            raise UnauthorizedError("User not found")

        await auth_repository.delete_refresh_token(db, data.refresh_token)
        return await self._generate_tokens(db, user)

    async def logout(
        self,
        db: AsyncSession,
        refresh_token: str | None,
    ) -> None:
        """로그아웃 처리 — 리프레시 토큰을 삭제합니다."""
        if refresh_token:
            await auth_repository.delete_refresh_token(db, refresh_token)

    async def ensure_superadmin(
        self,
        db: AsyncSession,
        data: SuperadminRequest,
    ) -> SuperadminResponse:
        """설정된 슈퍼관리자 계정을 생성하거나 승격합니다.

        Create the SUPERADMIN_EMAIL account as an active admin, or promote
        and reactivate it when it already exists.

        Returns:
            SuperadminResponse: status ∈ created | promoted | exists

        Raises:
            ForbiddenError: SUPERADMIN_EMAIL 미설정 또는 다른 이메일
        """
        allowed = settings.SUPERADMIN_EMAIL.strip().lower()
        email = data.email.strip().lower()
        if not allowed or email != allowed:
            raise ForbiddenError("Not authorized to create a superadmin")

        user: User | None = await user_repository.get_by_email(db, email)
        if user is None:
            user = await user_repository.create(db, {
                "email": email,
                "name": data.name or "Super Admin",
                "password_hash": hash_password(data.password),
                "role": ROLE_ADMIN,
                "is_active": True,
            })
            logger.info("Superadmin {} created", email)
            return SuperadminResponse(
                status="created", message="Superadmin created", user=to_session(user)
            )

        if user.role == ROLE_ADMIN and user.is_active:
            return SuperadminResponse(
                status="exists", message="Superadmin already exists", user=to_session(user)
            )

        user = await user_repository.update(db, user, {"role": ROLE_ADMIN, "is_active": True})
        logger.info("User {} promoted to superadmin", email)
        return SuperadminResponse(
            status="promoted", message="User promoted to admin", user=to_session(user)
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
