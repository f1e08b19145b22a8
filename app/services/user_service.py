"""사용자 서비스 — 사용자 조회, 수정, 비밀번호 변경 비즈니스 로직.

User Service — Business logic for the admin user list, per-user updates
and self-service password changes.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import ROLE_ADMIN, ROLES, User
from app.repositories.auth_repository import auth_repository
from app.repositories.user_repository import user_repository
from app.schemas.user import PasswordChange, UserResponse, UserUpdate
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from app.utils.logger import logger
from app.utils.password import hash_password, verify_password

MIN_PASSWORD_LENGTH: int = 8


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, user: User) -> UserResponse:
        """사용자 모델을 응답 스키마로 변환합니다 (비밀번호 제외)."""
        return UserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def list_users(self, db: AsyncSession) -> list[UserResponse]:
        """전체 사용자 목록 — 최신 가입 순 (Newest first)."""
        users = await user_repository.list_newest_first(db)
        return [self._to_response(u) for u in users]

    async def get_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        current_user: User,
    ) -> UserResponse:
        """사용자 상세 — 본인 또는 관리자만 조회 가능.

        Raises:
            ForbiddenError: 타인 조회 (Non-admin reading another account)
            NotFoundError: 사용자 없음 (Unknown user)
        """
        if current_user.role != ROLE_ADMIN and current_user.id != user_id:
            raise ForbiddenError()

        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return self._to_response(user)

    async def update_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: UserUpdate,
        current_user: User,
    ) -> UserResponse:
        """사용자 정보를 수정합니다.

        관리자: role, is_active, name 변경 가능 (자기 강등 불가).
        일반 사용자: 본인 name 만 변경 가능.

        Raises:
            ForbiddenError: 권한 없는 필드/대상 (Field or target not allowed)
            BadRequestError: 잘못된 역할 또는 관리자 자기 강등
            NotFoundError: 사용자 없음
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        is_admin: bool = current_user.role == ROLE_ADMIN
        is_self: bool = current_user.id == user_id

        if not is_admin:
            if not is_self or set(update_data) - {"name"}:
                raise ForbiddenError()

        if "role" in update_data and update_data["role"] not in ROLES:
            raise BadRequestError("Invalid role specified")
        if "is_active" in update_data and update_data["is_active"] is None:
            raise BadRequestError("is_active must be a boolean")

        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        new_role = update_data.get("role")
        if is_self and user.role == ROLE_ADMIN and new_role and new_role != ROLE_ADMIN:
            raise BadRequestError("Admins cannot demote themselves")

        if update_data.get("role") is None:
            update_data.pop("role", None)

        user = await user_repository.update(db, user, update_data)
        logger.info("User {} updated by {}: {}", user.email, current_user.email, sorted(update_data))
        return self._to_response(user)

    async def change_password(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: PasswordChange,
        current_user: User,
    ) -> None:
        """본인 비밀번호를 변경합니다. 기존 리프레시 토큰은 모두 폐기됩니다.

        Raises:
            ForbiddenError: 타인 계정 (Not the caller's own account)
            BadRequestError: 누락, 8자 미만, 현재 비밀번호 불일치
            NotFoundError: 사용자 없음
        """
        if current_user.id != user_id:
            raise ForbiddenError("You can only change your own password")

        if not data.current_password or not data.new_password:
            raise BadRequestError("Current password and new password are required")
        if len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError("New password must be at least 8 characters long")

        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        if not verify_password(data.current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")

        await user_repository.update(db, user, {"password_hash": hash_password(data.new_password)})
        await auth_repository.delete_user_refresh_tokens(db, user.id)
        logger.info("Password changed for {}", user.email)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
