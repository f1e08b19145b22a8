"""사용자 라우터 — 사용자 목록, 조회, 수정, 비밀번호 변경.

User Router — Admin user list plus per-user read/update and
self-service password change.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import PasswordChange, UserResponse, UserUpdate
from app.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_admin)],
) -> list[UserResponse]:
    """사용자 목록 (관리자 전용, 최신순)."""
    return await user_service.list_users(db)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """사용자 상세 — 본인 또는 관리자."""
    return await user_service.get_user(db, user_id, current_user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """사용자 수정 — 관리자는 역할/활성 상태, 본인은 이름."""
    result: UserResponse = await user_service.update_user(db, user_id, data, current_user)
    await db.commit()
    return result


@router.post("/{user_id}/change-password", response_model=MessageResponse)
async def change_password(
    user_id: UUID,
    data: PasswordChange,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    """본인 비밀번호 변경."""
    await user_service.change_password(db, user_id, data, current_user)
    await db.commit()
    return MessageResponse(message="Password updated successfully")
