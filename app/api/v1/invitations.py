"""초대 라우터 — 관리자 초대 관리 및 공개 토큰 확인/수락.

Invitation Router.
    - 관리자: GET/POST /invitations, DELETE /invitations/{id}
    - 공개 (Public): GET/POST /invitations/{token}
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.invitation import (
    InvitationAccept,
    InvitationCreate,
    InvitationCreateResponse,
    InvitationResponse,
    InvitationVerifyResponse,
)
from app.schemas.user import UserResponse
from app.services.invitation_service import invitation_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[InvitationResponse])
async def list_invitations(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_admin)],
) -> list[InvitationResponse]:
    """초대 목록 (최신순)."""
    return await invitation_service.list_invitations(db)


@router.post("", response_model=InvitationCreateResponse, status_code=201)
async def create_invitation(
    data: InvitationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_admin)],
) -> InvitationCreateResponse:
    """초대 생성 및 초대 메일 발송."""
    result: InvitationCreateResponse = await invitation_service.create_invitation(db, data)
    await db.commit()
    return result


@router.delete("/{invitation_id}", response_model=MessageResponse)
async def revoke_invitation(
    invitation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(require_admin)],
) -> MessageResponse:
    """초대 취소."""
    await invitation_service.revoke_invitation(db, invitation_id)
    await db.commit()
    return MessageResponse(message="Invitation revoked successfully")


@router.get("/{token}", response_model=InvitationVerifyResponse)
async def verify_invitation(
    token: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> InvitationVerifyResponse:
    """초대 토큰 확인 (공개) — 404 unknown, 400 used/expired."""
    return await invitation_service.verify_invitation(db, token)


@router.post("/{token}", response_model=UserResponse, status_code=201)
async def accept_invitation(
    token: str,
    data: InvitationAccept,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """초대 수락 (공개) — 초대 역할로 계정 생성."""
    result: UserResponse = await invitation_service.accept_invitation(db, token, data)
    await db.commit()
    return result
