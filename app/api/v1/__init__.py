"""API v1 라우터 패키지 — 모든 대시보드 엔드포인트 통합.

API v1 Router package — Aggregates all dashboard endpoints into a single
router mounted at /api/v1.

Included routers:
    - auth: 로그인/세션 (Login, session, superadmin bootstrap)
    - users: 사용자 관리 (User management)
    - invitations: 초대 (Invitations, public accept flow)
    - posts: 게시물 (Posts and rendering)
    - media / upload: 미디어 라이브러리와 업로드 (Media library and uploads)
    - cards: 카드 블록 데이터 (Card block data)
    - analytics: 대시보드 통계 (Dashboard analytics)
"""

from fastapi import APIRouter

from app.api.v1.analytics import router as analytics_router
from app.api.v1.auth import router as auth_router
from app.api.v1.cards import router as cards_router
from app.api.v1.invitations import router as invitations_router
from app.api.v1.media import router as media_router
from app.api.v1.media import upload_router
from app.api.v1.posts import router as posts_router
from app.api.v1.users import router as users_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(invitations_router, prefix="/invitations", tags=["Invitations"])
api_router.include_router(posts_router, prefix="/posts", tags=["Posts"])
api_router.include_router(media_router, prefix="/media", tags=["Media"])
api_router.include_router(upload_router, prefix="/upload", tags=["Media"])
api_router.include_router(cards_router, prefix="/cards", tags=["Cards"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["Analytics"])
