"""예외 핸들러 테스트 — DB 제약 위반과 처리되지 않은 예외.

Exception handler tests — Constraint violations that reach the database
instead of a service pre-check, and the catch-all 500 handler.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

from app.main import app
from app.repositories.post_repository import post_repository
from tests.conftest import auth_header

POSTS = "/api/v1/posts"


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO posts ...", {}, Exception(message))


@pytest_asyncio.fixture
async def lenient_client(client: AsyncClient) -> AsyncGenerator[AsyncClient, None]:
    """앱 예외를 재발생시키지 않는 클라이언트 — Returns the 500 response instead of raising."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestIntegrityErrors:
    """DB 제약 위반 응답 테스트."""

    async def test_unique_violation_is_conflict(self, client: AsyncClient, editor_token, monkeypatch):
        """사전 검사를 우회한 중복 슬러그 — 유니크 제약이 409."""
        first = await client.post(POSTS, json={"title": "One", "slug": "taken"}, headers=auth_header(editor_token))
        assert first.status_code == 201

        monkeypatch.setattr(post_repository, "slug_exists", AsyncMock(return_value=False))
        res = await client.post(POSTS, json={"title": "Two", "slug": "taken"}, headers=auth_header(editor_token))
        assert res.status_code == 409
        assert res.json() == {"detail": "Resource already exists"}

    async def test_foreign_key_violation_is_conflict(self, client: AsyncClient, editor_token, monkeypatch):
        monkeypatch.setattr(
            post_repository,
            "slug_exists",
            AsyncMock(side_effect=_integrity_error("FOREIGN KEY constraint failed")),
        )
        res = await client.post(POSTS, json={"title": "T"}, headers=auth_header(editor_token))
        assert res.status_code == 409
        assert res.json() == {"detail": "Related resource constraint violated"}

    async def test_other_integrity_error_is_server_error(self, client: AsyncClient, editor_token, monkeypatch):
        """유니크/외래키 외 제약 위반은 500."""
        monkeypatch.setattr(
            post_repository,
            "slug_exists",
            AsyncMock(side_effect=_integrity_error("CHECK constraint failed: status")),
        )
        res = await client.post(POSTS, json={"title": "T"}, headers=auth_header(editor_token))
        assert res.status_code == 500
        assert res.json() == {"detail": "Internal server error"}


class TestUnhandledErrors:
    """처리되지 않은 예외 테스트."""

    async def test_unexpected_error_is_server_error(self, lenient_client: AsyncClient, editor_token, monkeypatch):
        monkeypatch.setattr(post_repository, "slug_exists", AsyncMock(side_effect=RuntimeError("boom")))
        res = await lenient_client.post(POSTS, json={"title": "T"}, headers=auth_header(editor_token))
        assert res.status_code == 500
        assert res.json() == {"detail": "Internal server error"}
