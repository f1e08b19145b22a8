"""초대 레포지토리 — Invitation lookups by token and email."""

from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.invitation import Invitation
from app.repositories.base import BaseRepository


class InvitationRepository(BaseRepository[Invitation]):

    def __init__(self) -> None:
        super().__init__(Invitation)

    async def get_by_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> Invitation | None:
        result = await db.execute(select(Invitation).where(Invitation.token == token))
        return result.scalar_one_or_none()

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Invitation | None:
        query: Select = select(Invitation).where(func.lower(Invitation.email) == email.lower())
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_newest_first(self, db: AsyncSession) -> Sequence[Invitation]:
        return await self.get_all(db, order_by=Invitation.created_at.desc())


# 싱글턴 인스턴스 — Singleton instance
invitation_repository: InvitationRepository = InvitationRepository()
