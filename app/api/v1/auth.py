"""인증 라우터 — 로그인, 회원가입, 토큰 갱신, 로그아웃, 세션 조회.

Auth Router — Login, registration, refresh, logout, session view and
the superadmin bootstrap. Login and refresh also set the HttpOnly
session cookie; logout clears it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_session_user
from app.config import settings
from app.database import get_db
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    SessionResponse,
    SuperadminRequest,
    SuperadminResponse,
    TokenResponse,
)
from app.services.auth_service import auth_service, to_session

router: APIRouter = APIRouter()


def _set_session_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=access_token,
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """이메일/비밀번호 로그인 — 토큰 발급 및 세션 쿠키 설정."""
    result: TokenResponse = await auth_service.login(db, data)
    await db.commit()
    _set_session_cookie(response, result.access_token)
    return result


@router.post("/register", response_model=SessionResponse, status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionResponse:
    """자가 회원가입 — author 역할로 계정 생성."""
    result: SessionResponse = await auth_service.register(db, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급 (회전)."""
    result: TokenResponse = await auth_service.refresh_tokens(db, data)
    await db.commit()
    _set_session_cookie(response, result.access_token)
    return result


@router.post("/logout", status_code=204)
async def logout(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    data: LogoutRequest | None = None,
) -> None:
    """로그아웃 — 리프레시 토큰 폐기 및 세션 쿠키 삭제."""
    await auth_service.logout(db, data.refresh_token if data else None)
    await db.commit()
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")


@router.get("/me", response_model=SessionResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_session_user)],
) -> SessionResponse:
    """현재 세션 사용자 — 비활성 계정도 조회 가능 (is_active=false)."""
    return to_session(current_user)


@router.post("/superadmin", response_model=SuperadminResponse)
async def create_superadmin(
    data: SuperadminRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuperadminResponse:
    """슈퍼관리자 부트스트랩 — SUPERADMIN_EMAIL 만 허용."""
    result: SuperadminResponse = await auth_service.ensure_superadmin(db, data)
    await db.commit()
    return result
