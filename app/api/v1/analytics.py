"""분석 라우터 — 대시보드 요약 통계."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.analytics import AnalyticsResponse
from app.services.analytics_service import analytics_service

router: APIRouter = APIRouter()


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> AnalyticsResponse:
    """대시보드 요약 — 게시물/미디어/사용자 통계와 최근 활동."""
    return await analytics_service.get_summary(db)
