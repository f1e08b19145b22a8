"""사용자 레포지토리 — 사용자 CRUD 및 조회 쿼리.

User Repository — CRUD and lookup queries for dashboard accounts.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다 — Case-insensitive email lookup."""
        query: Select = select(User).where(func.lower(User.email) == email.lower())
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_newest_first(self, db: AsyncSession) -> Sequence[User]:
        return await self.get_all(db, order_by=User.created_at.desc())

    async def count_by_role(self, db: AsyncSession) -> dict[str, int]:
        """역할별 사용자 수 — User counts grouped by role."""
        result = await db.execute(select(User.role, func.count()).group_by(User.role))
        return {role: count for role, count in result.all()}

    async def count_created_between(
        self,
        db: AsyncSession,
        start: datetime,
        end: datetime,
    ) -> int:
        query: Select = select(func.count()).select_from(User).where(
            User.created_at >= start, User.created_at < end
        )
        return (await db.execute(query)).scalar() or 0

    async def get_recently_updated(
        self,
        db: AsyncSession,
        limit: int = 5,
    ) -> Sequence[User]:
        """최근 수정된 사용자 — Most recently updated accounts."""
        query: Select = select(User).order_by(User.updated_at.desc()).limit(limit)
        result = await db.execute(query)
        return result.scalars().all()


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
