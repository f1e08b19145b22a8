"""대시보드 분석 응답 스키마.

Dashboard analytics response schemas.
Growth is the percentage change of the last 7 days versus the 7 days before.
"""

from datetime import datetime
from pydantic import BaseModel


class CountStats(BaseModel):
    """총계/신규/성장률 — Total, new in the last 7 days, growth %."""

    total: int
    new: int
    growth: float


class PostStats(CountStats):
    by_status: dict[str, int]  # 소문자 상태별 개수 (Lower-case status → count)


class UserStats(CountStats):
    by_role: dict[str, int]


class RecentPost(BaseModel):
    """최근 수정된 게시물."""

    id: str
    title: str
    status: str  # 소문자 (lower-case)
    author: str  # 작성자 표시 이름, 없으면 "Unknown"
    date: str  # "MMM d, yyyy"
    updated_at: datetime


class ActivityEntry(BaseModel):
    """최근 활동 — 사용자 수정 또는 미디어 업로드."""

    id: str  # "user-<uuid>" | "media-<uuid>"
    type: str  # user | media
    description: str
    timestamp: datetime
    date: str  # "MMM d, yyyy"


class AnalyticsResponse(BaseModel):
    """대시보드 요약 응답 (GET /analytics)."""

    posts: PostStats
    media: CountStats
    users: UserStats
    recent_posts: list[RecentPost]
    recent_activity: list[ActivityEntry]
