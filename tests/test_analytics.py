"""분석 API 테스트 — 대시보드 요약 통계와 최근 활동.

Analytics API tests — Totals, seven-day growth, status/role breakdowns,
recent posts and the merged activity feed.
"""

from httpx import AsyncClient

from app.services.analytics_service import growth_percent
from tests.conftest import auth_header

ANALYTICS = "/api/v1/analytics"


class TestGrowth:
    """성장률 계산 테스트."""

    def test_growth_percent(self):
        assert growth_percent(10, 3, 1) == 200.0
        assert growth_percent(5, 2, 0) == 200.0
        assert growth_percent(4, 0, 2) == -100.0

    def test_growth_zero_total(self):
        assert growth_percent(0, 0, 0) == 0.0


class TestSummary:
    """대시보드 요약 테스트."""

    async def test_empty_counts(self, client: AsyncClient, admin_token):
        res = await client.get(ANALYTICS, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["posts"]["total"] == 0
        assert data["posts"]["by_status"] == {"draft": 0, "published": 0, "archived": 0}
        assert data["media"]["total"] == 0
        assert data["users"]["total"] == 1
        assert data["users"]["by_role"] == {"admin": 1, "editor": 0, "author": 0}
        assert data["recent_posts"] == []

    async def test_summary(self, client: AsyncClient, admin_token, editor_token, author_user):
        """게시물/미디어/사용자 집계와 최근 활동."""
        await client.post(
            "/api/v1/posts",
            json={"title": "Launch", "status": "published", "content": '<img src="/hero.jpg" alt="Hero">'},
            headers=auth_header(editor_token),
        )
        await client.post("/api/v1/posts", json={"title": "Draft"}, headers=auth_header(editor_token))
        await client.post(
            "/api/v1/media",
            json={"url": "/lib.mp4", "type": "video"},
            headers=auth_header(admin_token),
        )

        res = await client.get(ANALYTICS, headers=auth_header(admin_token))
        data = res.json()

        assert data["posts"]["total"] == 2
        assert data["posts"]["new"] == 2
        assert data["posts"]["growth"] == 200.0
        assert data["posts"]["by_status"] == {"draft": 1, "published": 1, "archived": 0}
        assert data["media"]["total"] == 2
        assert data["users"]["total"] == 3
        assert data["users"]["by_role"] == {"admin": 1, "editor": 1, "author": 1}

        recent = data["recent_posts"]
        assert {p["title"] for p in recent} == {"Launch", "Draft"}
        assert {p["status"] for p in recent} == {"published", "draft"}
        assert all(p["author"] == "Test Editor" for p in recent)

        activity = data["recent_activity"]
        assert 0 < len(activity) <= 5
        descriptions = {a["description"] for a in activity}
        assert "Test Editor uploaded a image to Launch" in descriptions
        assert "Someone uploaded a video to the media library" in descriptions
        timestamps = [a["timestamp"] for a in activity]
        assert timestamps == sorted(timestamps, reverse=True)

    async def test_requires_session(self, client: AsyncClient):
        res = await client.get(ANALYTICS)
        assert res.status_code == 401
