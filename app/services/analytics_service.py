"""분석 서비스 — 대시보드 요약 통계.

Analytics Service — Dashboard summary built from plain table counts.
No page-view numbers are produced; only data the database actually holds.
"""

from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import POST_STATUSES
from app.models.user import ROLES
from app.repositories.media_repository import media_repository
from app.repositories.post_repository import post_repository
from app.repositories.user_repository import user_repository
from app.schemas.analytics import (
    ActivityEntry,
    AnalyticsResponse,
    CountStats,
    PostStats,
    RecentPost,
    UserStats,
)
from app.utils.time import as_utc, format_display_date, utc_now

# 비교 구간 — Comparison window (last 7 days vs the 7 days before)
WINDOW: timedelta = timedelta(days=7)
RECENT_LIMIT: int = 5
# 활동 출처별 조회 수 — Entries fetched per activity source before merging
ACTIVITY_PER_SOURCE: int = 3


def growth_percent(total: int, last: int, previous: int) -> float:
    """성장률 (%) — 전체가 0 이면 0.

    Example:
        >>> growth_percent(10, 3, 1)
        200.0
    """
    if total == 0:
        return 0.0
    return (last - previous) / max(1, previous) * 100


class AnalyticsService:
    """대시보드 분석 비즈니스 로직."""

    async def _count_stats(self, repository, db: AsyncSession, now: datetime) -> CountStats:
        total = await repository.count(db)
        last = await repository.count_created_between(db, now - WINDOW, now + timedelta(seconds=1))
        previous = await repository.count_created_between(db, now - 2 * WINDOW, now - WINDOW)
        return CountStats(total=total, new=last, growth=growth_percent(total, last, previous))

    async def _recent_activity(self, db: AsyncSession) -> list[ActivityEntry]:
        entries: list[ActivityEntry] = []

        for user in await user_repository.get_recently_updated(db, ACTIVITY_PER_SOURCE):
            entries.append(ActivityEntry(
                id=f"user-{user.id}",
                type="user",
                description=f"{user.display_name} updated their profile",
                timestamp=as_utc(user.updated_at),
                date=format_display_date(user.updated_at),
            ))

        for item in await media_repository.get_recent(db, ACTIVITY_PER_SOURCE):
            post = item.post
            who = post.author.display_name if post is not None and post.author is not None else "Someone"
            where = post.title if post is not None else "the media library"
            entries.append(ActivityEntry(
                id=f"media-{item.id}",
                type="media",
                description=f"{who} uploaded a {item.type.lower()} to {where}",
                timestamp=as_utc(item.created_at),
                date=format_display_date(item.created_at),
            ))

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:RECENT_LIMIT]

    async def get_summary(self, db: AsyncSession) -> AnalyticsResponse:
        """대시보드 요약을 계산합니다.

        Returns:
            AnalyticsResponse: posts/media/users 통계, 최근 게시물 5개, 최근 활동 최대 5개
        """
        now = utc_now()

        post_counts = await self._count_stats(post_repository, db, now)
        by_status = await post_repository.count_by_status(db)
        users_counts = await self._count_stats(user_repository, db, now)
        by_role = await user_repository.count_by_role(db)

        recent_posts = [
            RecentPost(
                id=str(p.id),
                title=p.title,
                status=p.status.lower(),
                author=p.author.display_name if p.author is not None else "Unknown",
                date=format_display_date(p.updated_at),
                updated_at=p.updated_at,
            )
            for p in await post_repository.get_recently_updated(db, RECENT_LIMIT)
        ]

        return AnalyticsResponse(
            posts=PostStats(
                **post_counts.model_dump(),
                by_status={s.lower(): by_status.get(s, 0) for s in POST_STATUSES},
            ),
            media=await self._count_stats(media_repository, db, now),
            users=UserStats(
                **users_counts.model_dump(),
                by_role={r: by_role.get(r, 0) for r in ROLES},
            ),
            recent_posts=recent_posts,
            recent_activity=await self._recent_activity(db),
        )


# 싱글턴 인스턴스 — Singleton instance
analytics_service: AnalyticsService = AnalyticsService()
