"""초대 서비스 — 초대 생성, 검증, 수락, 취소 비즈니스 로직.

Invitation Service — Admin-issued, time-limited sign-up tokens that
create an account with a preset role.

Flow:
    1. 관리자가 이메일/역할로 초대 생성 → 토큰 발급 + 초대 메일 발송
    2. 초대받은 사용자가 {APP_URL}/join/{token} 에서 토큰 확인 (GET)
    3. 이름/비밀번호로 수락 (POST) → 계정 생성, 초대 사용 처리
"""

import secrets
from datetime import timedelta
from html import escape
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.invitation import Invitation
from app.models.user import ROLES, User
from app.repositories.invitation_repository import invitation_repository
from app.repositories.user_repository import user_repository
from app.schemas.invitation import (
    InvitationAccept,
    InvitationCreate,
    InvitationCreateResponse,
    InvitationResponse,
    InvitationVerifyResponse,
)
from app.schemas.user import UserResponse
from app.utils.email import send_email_safely
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.utils.logger import logger
from app.utils.password import hash_password
from app.utils.time import as_utc, utc_now

# 토큰 길이 — 32 random bytes → 64 hex chars
TOKEN_BYTES: int = 32


def invite_url(token: str) -> str:
    return f"{settings.APP_URL.rstrip('/')}/join/{token}"


def build_invitation_email(url: str, role: str) -> tuple[str, str]:
    """초대 메일 본문 (HTML, 플레인텍스트)."""
    hours = settings.INVITATION_EXPIRE_HOURS
    safe_url = escape(url, quote=True)
    html = f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>You've Been Invited!</title></head>
<body style="font-family: 'Segoe UI', Tahoma, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="text-align: center;">You've Been Invited!</h1>
    <p>Hello,</p>
    <p>You have been invited to join {escape(settings.APP_NAME)} as a <strong>{escape(role)}</strong>.</p>
    <p>To accept this invitation and create your account, click the button below:</p>
    <p style="text-align: center;">
      <a href="{safe_url}" style="display: inline-block; background: #007bff; color: #fff;
         text-decoration: none; padding: 12px 24px; border-radius: 4px; font-weight: bold;">Accept Invitation</a>
    </p>
    <p><strong>Note:</strong> This invitation link is valid for {hours} hours only.</p>
    <p>If you did not expect this invitation, you can safely ignore this email.</p>
    <p style="font-size: 12px; color: #6c757d;">
      If the button does not work, copy this URL into your browser:<br>
      <a href="{safe_url}">{safe_url}</a>
    </p>
  </div>
</body>
</html>"""
    text = (
        f"You have been invited to join {settings.APP_NAME} as a {role}.\n\n"
        f"Accept the invitation and create your account:\n{url}\n\n"
        f"This link is valid for {hours} hours. "
        "If you did not expect this invitation, you can ignore this email.\n"
    )
    return html, text


class InvitationService:
    """초대 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, invitation: Invitation) -> InvitationResponse:
        return InvitationResponse(
            id=str(invitation.id),
            email=invitation.email,
            role=invitation.role,
            token=invitation.token,
            invite_url=invite_url(invitation.token),
            expires_at=invitation.expires_at,
            used=invitation.used,
            created_at=invitation.created_at,
        )

    async def list_invitations(self, db: AsyncSession) -> list[InvitationResponse]:
        invitations = await invitation_repository.list_newest_first(db)
        return [self._to_response(i) for i in invitations]

    async def create_invitation(
        self,
        db: AsyncSession,
        data: InvitationCreate,
    ) -> InvitationCreateResponse:
        """초대를 생성하고 초대 메일을 발송합니다.

        같은 이메일의 기존 초대는 새 초대로 교체됩니다.
        메일 발송 실패는 로그만 남기고 요청은 성공합니다.

        Raises:
            BadRequestError: 잘못된 역할 또는 이미 가입된 이메일
        """
        email = data.email.strip().lower()
        if data.role not in ROLES:
            raise BadRequestError("Invalid role specified")

        if await user_repository.get_by_email(db, email) is not None:
            raise BadRequestError("This email address is already associated with an account")

        existing: Invitation | None = await invitation_repository.get_by_email(db, email)
        if existing is not None:
            await invitation_repository.delete(db, existing)

        invitation: Invitation = await invitation_repository.create(db, {
            "email": email,
            "role": data.role,
            "token": secrets.token_hex(TOKEN_BYTES),
            "expires_at": utc_now() + timedelta(hours=settings.INVITATION_EXPIRE_HOURS),
        })

        url = invite_url(invitation.token)
        html, text = build_invitation_email(url, invitation.role)
        sent = await send_email_safely(
            invitation.email,
            f"You have been invited to join {settings.APP_NAME}",
            html,
            text,
        )
        logger.info("Invitation created for {} as {} (email sent: {})", email, data.role, sent)

        return InvitationCreateResponse(**self._to_response(invitation).model_dump(), email_sent=sent)

    async def revoke_invitation(
        self,
        db: AsyncSession,
        invitation_id: UUID,
    ) -> None:
        """초대를 취소(삭제)합니다.

        Raises:
            NotFoundError: 초대 없음
        """
        invitation: Invitation | None = await invitation_repository.get_by_id(db, invitation_id)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        await invitation_repository.delete(db, invitation)
        logger.info("Invitation for {} revoked", invitation.email)

    async def _get_open_invitation(self, db: AsyncSession, token: str) -> Invitation:
        """사용 가능한 초대를 조회 — 404 unknown, 400 used/expired."""
        invitation: Invitation | None = await invitation_repository.get_by_token(db, token)
        if invitation is None:
            raise NotFoundError("Invalid invitation token")
        if invitation.used:
            raise BadRequestError("This invitation has already been used")
        if as_utc(invitation.expires_at) < utc_now():
            raise BadRequestError("This invitation has expired")
        return invitation

    async def verify_invitation(
        self,
        db: AsyncSession,
        token: str,
    ) -> InvitationVerifyResponse:
        invitation = await self._get_open_invitation(db, token)
        return InvitationVerifyResponse(valid=True, email=invitation.email, role=invitation.role)

    async def accept_invitation(
        self,
        db: AsyncSession,
        token: str,
        data: InvitationAccept,
    ) -> UserResponse:
        """초대를 수락하여 계정을 생성합니다.

        Creates the account with the invitation's role and marks the
        invitation as used.

        Raises:
            NotFoundError: 알 수 없는 토큰
            BadRequestError: 사용됨 또는 만료됨
            DuplicateError: 이미 가입된 이메일
        """
        invitation = await self._get_open_invitation(db, token)

        if await user_repository.get_by_email(db, invitation.email) is not None:
            raise DuplicateError("User already exists")

        user: User = await user_repository.create(db, {
            "email": invitation.email,
            "name": data.name.strip(),
            "password_hash": hash_password(data.password),
            "role": invitation.role,
        })
        await invitation_repository.update(db, invitation, {"used": True})
        logger.info("Invitation accepted by {} ({})", user.email, user.role)

        return UserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


# 싱글턴 인스턴스 — Singleton instance
invitation_service: InvitationService = InvitationService()
