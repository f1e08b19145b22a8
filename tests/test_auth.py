"""인증 API 테스트 — 로그인, 회원가입, 토큰 갱신, 로그아웃, /me, 슈퍼관리자.

Auth API tests — Login, registration, refresh rotation, logout, session
cookie, /me and the superadmin bootstrap.
"""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient
from sqlalchemy import select

from app.config import settings
from app.models.token import RefreshToken
from app.utils.jwt import create_refresh_token
from tests.conftest import auth_header, make_token

AUTH = "/api/v1/auth"


class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, admin_user):
        """로그인 성공 — 토큰 발급 및 세션 쿠키 설정."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "admin@test.com",
            "password": "password123",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"
        assert settings.SESSION_COOKIE_NAME in res.cookies

    async def test_login_email_case_insensitive(self, client: AsyncClient, admin_user):
        res = await client.post(f"{AUTH}/login", json={
            "email": "ADMIN@Test.com",
            "password": "password123",
        })
        assert res.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient, admin_user):
        """잘못된 비밀번호로 로그인 실패."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "admin@test.com",
            "password": "wrong_password",
        })
        assert res.status_code == 401
        assert res.json()["detail"] == "Invalid email or password"

    async def test_login_unknown_user(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/login", json={
            "email": "nobody@test.com",
            "password": "password123",
        })
        assert res.status_code == 401

    async def test_inactive_user_can_sign_in(self, client: AsyncClient, inactive_user):
        """비활성 계정도 로그인은 가능 — 세션에 is_active=false."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "inactive@test.com",
            "password": "password123",
        })
        assert res.status_code == 200

        me = await client.get(f"{AUTH}/me")
        assert me.status_code == 200
        assert me.json()["is_active"] is False

        posts = await client.get("/api/v1/posts")
        assert posts.status_code == 403


class TestSession:
    """세션 (/me, 쿠키, 토큰 타입) 테스트."""

    async def test_me_with_bearer(self, client: AsyncClient, editor_user, editor_token):
        res = await client.get(f"{AUTH}/me", headers=auth_header(editor_token))
        assert res.status_code == 200
        data = res.json()
        assert data["email"] == "editor@test.com"
        assert data["role"] == "editor"
        assert data["id"] == str(editor_user.id)

    async def test_me_with_cookie(self, client: AsyncClient, author_user):
        """로그인 후 쿠키만으로 세션 조회."""
        await client.post(f"{AUTH}/login", json={
            "email": "author@test.com",
            "password": "password123",
        })
        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 200
        assert res.json()["role"] == "author"

    async def test_me_without_session(self, client: AsyncClient):
        """세션 없으면 401."""
        res = await client.get(f"{AUTH}/me")
        assert res.status_code == 401

    async def test_me_with_garbage_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me", headers=auth_header("not-a-jwt"))
        assert res.status_code == 401

    async def test_refresh_token_rejected_as_session(self, client: AsyncClient, admin_user):
        """리프레시 토큰을 세션 토큰으로 사용하면 401."""
        token = create_refresh_token({"sub": str(admin_user.id)})
        res = await client.get(f"{AUTH}/me", headers=auth_header(token))
        assert res.status_code == 401

    async def test_token_for_deleted_user(self, client: AsyncClient, db, author_user):
        token = make_token(author_user)
        await db.delete(author_user)
        await db.flush()
        res = await client.get(f"{AUTH}/me", headers=auth_header(token))
        assert res.status_code == 401


class TestRegister:
    """회원가입 테스트."""

    async def test_register_creates_author(self, client: AsyncClient):
        """자가 가입은 author 역할."""
        res = await client.post(f"{AUTH}/register", json={
            "email": "New@Example.com",
            "password": "password123",
            "name": "Newbie",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["email"] == "new@example.com"
        assert data["role"] == "author"
        assert data["is_active"] is True

    async def test_register_duplicate(self, client: AsyncClient, author_user):
        res = await client.post(f"{AUTH}/register", json={
            "email": "author@test.com",
            "password": "password123",
        })
        assert res.status_code == 409

    async def test_register_short_password(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json={
            "email": "short@test.com",
            "password": "short",
        })
        assert res.status_code == 422

    async def test_register_invalid_email(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json={
            "email": "not-an-email",
            "password": "password123",
        })
        assert res.status_code == 422


class TestRefreshAndLogout:
    """토큰 갱신 및 로그아웃 테스트."""

    async def _login(self, client: AsyncClient) -> dict:
        res = await client.post(f"{AUTH}/login", json={
            "email": "admin@test.com",
            "password": "password123",
        })
        return res.json()

    async def test_refresh_rotates_token(self, client: AsyncClient, admin_user):
        """갱신 시 새 토큰 쌍 발급, 기존 리프레시 토큰은 폐기."""
        tokens = await self._login(client)
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        new_tokens = res.json()
        assert new_tokens["refresh_token"] != tokens["refresh_token"]

        reuse = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert reuse.status_code == 401

    async def test_refresh_unknown_token(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": "unknown"})
        assert res.status_code == 401

    async def test_expired_refresh_token_replaced_on_login(self, client: AsyncClient, db, admin_user):
        """만료된 토큰은 401, 다음 로그인 시 교체."""
        tokens = await self._login(client)
        row = (await db.execute(
            select(RefreshToken).where(RefreshToken.token == tokens["refresh_token"])
        )).scalar_one()
        row.expires_at = datetime.now(timezone.utc) - timedelta(days=1)
        await db.flush()

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401
        assert res.json()["detail"] == "Refresh token has expired"

        fresh = await self._login(client)
        stored = (await db.execute(
            select(RefreshToken.token).where(RefreshToken.user_id == admin_user.id)
        )).scalars().all()
        assert stored == [fresh["refresh_token"]]

    async def test_logout_revokes_refresh_token(self, client: AsyncClient, admin_user):
        """로그아웃 — 204, 리프레시 토큰 폐기."""
        tokens = await self._login(client)
        res = await client.post(f"{AUTH}/logout", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204

        refresh = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refresh.status_code == 401

    async def test_logout_clears_cookie(self, client: AsyncClient, admin_user):
        await self._login(client)
        res = await client.post(f"{AUTH}/logout")
        assert res.status_code == 204

        me = await client.get(f"{AUTH}/me")
        assert me.status_code == 401


class TestSuperadmin:
    """슈퍼관리자 부트스트랩 테스트 (SUPERADMIN_EMAIL=root@example.com)."""

    async def test_create_superadmin(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/superadmin", json={
            "email": "root@example.com",
            "password": "password123",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "created"
        assert data["user"]["role"] == "admin"

        again = await client.post(f"{AUTH}/superadmin", json={
            "email": "root@example.com",
            "password": "password123",
        })
        assert again.json()["status"] == "exists"

    async def test_promote_existing_user(self, client: AsyncClient, db):
        """기존 계정은 admin 으로 승격 및 활성화."""
        from tests.conftest import _create_user
        await _create_user(db, "root@example.com", "author", "Root", is_active=False)

        res = await client.post(f"{AUTH}/superadmin", json={
            "email": "root@example.com",
            "password": "password123",
        })
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "promoted"
        assert data["user"]["role"] == "admin"
        assert data["user"]["is_active"] is True

    async def test_other_email_forbidden(self, client: AsyncClient):
        """설정되지 않은 이메일은 403."""
        res = await client.post(f"{AUTH}/superadmin", json={
            "email": "someone@example.com",
            "password": "password123",
        })
        assert res.status_code == 403
