"""인증 레포지토리 — 리프레시 토큰 저장과 폐기.

Auth Repository — Refresh tokens backing dashboard sessions.
A user holds at most one live refresh token; login and refresh replace it,
logout and password changes revoke it.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.token import RefreshToken
from app.repositories.base import BaseRepository


class AuthRepository(BaseRepository[RefreshToken]):
    """리프레시 토큰 테이블 쿼리 레포지토리."""

    def __init__(self) -> None:
        super().__init__(RefreshToken)

    async def create_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        token: str,
        expires_at: datetime,
    ) -> RefreshToken:
        """새 리프레시 토큰을 저장합니다 — Persist a freshly issued refresh token."""
        return await self.create(db, {
            "user_id": user_id,
            "token": token,
            "expires_at": expires_at,
        })

    async def get_refresh_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> RefreshToken | None:
        query: Select = select(RefreshToken).where(RefreshToken.token == token)
        return (await db.execute(query)).scalar_one_or_none()

    async def delete_refresh_token(self, db: AsyncSession, token: str) -> None:
        """토큰 문자열로 폐기 — Unknown tokens are ignored."""
        await db.execute(delete(RefreshToken).where(RefreshToken.token == token))
        await db.flush()

    async def delete_user_refresh_tokens(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> None:
        """사용자의 모든 세션 폐기 — Revoke every refresh token of a user."""
        await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
auth_repository: AuthRepository = AuthRepository()
