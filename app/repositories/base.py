"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.

Usage:
    class PostRepository(BaseRepository[Post]):
        def __init__(self) -> None:
            super().__init__(Post)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base

# 제네릭 타입 변수 — Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.
    Only ``flush`` is issued here; routers own the transaction commit.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    def _filtered(self, query: Select, filters: dict[str, Any] | None) -> Select:
        # None 값은 "필터 없음" — None means "no filter" for that column
        for column_name, value in (filters or {}).items():
            if value is not None and hasattr(self.model, column_name):
                query = query.where(getattr(self.model, column_name) == value)
        return query

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다 — Retrieve a single record by UUID."""
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 추가 필터 딕셔너리 {'컬럼명': 값}, None 값은 무시
                     (Equality filters; None values are skipped)
            order_by: 정렬 기준 컬럼 (Column to order by)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = self._filtered(select(self.model), filters)
        if order_by is not None:
            query = query.order_by(order_by)

        result = await db.execute(query)
        return result.scalars().all()

    async def count(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
    ) -> int:
        """조건에 맞는 레코드 수 — Count records matching equality filters."""
        query: Select = self._filtered(select(func.count()).select_from(self.model), filters)
        return (await db.execute(query)).scalar() or 0

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다 — Create and flush a new record."""
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
    ) -> ModelType:
        """기존 레코드를 업데이트합니다.

        Apply ``update_data`` onto an already-loaded record.
        Keys that are not model attributes are ignored; None values are applied.
        """
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(
        self,
        db: AsyncSession,
        db_obj: ModelType,
    ) -> None:
        """레코드를 삭제합니다 — ORM-level delete so relationship cascades apply."""
        await db.delete(db_obj)
        await db.flush()
