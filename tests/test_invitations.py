"""초대 API 테스트 — 생성, 메일 발송, 확인, 수락, 취소.

Invitation API tests — Admin creation with mocked SMTP delivery, public
verification and acceptance, expiry and revocation.
"""

from datetime import datetime, timedelta, timezone

import aiosmtplib
from httpx import AsyncClient
from sqlalchemy import select

from app.models.invitation import Invitation
from tests.conftest import auth_header

INVITATIONS = "/api/v1/invitations"


async def _invite(client: AsyncClient, token: str, email: str = "new@test.com", role: str = "editor") -> dict:
    res = await client.post(INVITATIONS, json={"email": email, "role": role}, headers=auth_header(token))
    assert res.status_code == 201, res.text
    return res.json()


class TestCreateInvitation:
    """초대 생성 테스트."""

    async def test_create_sends_email(self, client: AsyncClient, admin_token, smtp_send):
        """초대 생성 시 토큰 발급 및 메일 발송."""
        data = await _invite(client, admin_token)
        assert len(data["token"]) == 64
        assert data["invite_url"].endswith(f"/join/{data['token']}")
        assert data["role"] == "editor"
        assert data["used"] is False
        assert data["email_sent"] is True

        smtp_send.assert_awaited_once()
        message = smtp_send.await_args.args[0]
        assert message["To"] == "new@test.com"

    async def test_email_failure_still_succeeds(self, client: AsyncClient, admin_token, smtp_send):
        """메일 발송 실패해도 초대는 생성."""
        smtp_send.side_effect = aiosmtplib.SMTPException("down")
        data = await _invite(client, admin_token)
        assert data["email_sent"] is False

        listed = await client.get(INVITATIONS, headers=auth_header(admin_token))
        assert [i["email"] for i in listed.json()] == ["new@test.com"]

    async def test_reinvite_replaces_previous(self, client: AsyncClient, admin_token):
        """같은 이메일 재초대 시 기존 초대 교체."""
        first = await _invite(client, admin_token)
        second = await _invite(client, admin_token, role="author")
        assert first["token"] != second["token"]

        listed = (await client.get(INVITATIONS, headers=auth_header(admin_token))).json()
        assert len(listed) == 1
        assert listed[0]["role"] == "author"

    async def test_existing_account_rejected(self, client: AsyncClient, admin_token, author_user):
        res = await client.post(INVITATIONS, json={"email": "author@test.com"}, headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_invalid_role(self, client: AsyncClient, admin_token):
        res = await client.post(INVITATIONS, json={"email": "x@test.com", "role": "owner"}, headers=auth_header(admin_token))
        assert res.status_code == 400

    async def test_non_admin_forbidden(self, client: AsyncClient, editor_token):
        res = await client.post(INVITATIONS, json={"email": "x@test.com"}, headers=auth_header(editor_token))
        assert res.status_code == 403


class TestAcceptInvitation:
    """공개 초대 확인/수락 테스트."""

    async def test_verify(self, client: AsyncClient, admin_token):
        invitation = await _invite(client, admin_token)
        res = await client.get(f"{INVITATIONS}/{invitation['token']}")
        assert res.status_code == 200
        assert res.json() == {"valid": True, "email": "new@test.com", "role": "editor"}

    async def test_verify_unknown(self, client: AsyncClient):
        res = await client.get(f"{INVITATIONS}/unknown-token")
        assert res.status_code == 404

    async def test_accept_creates_account(self, client: AsyncClient, admin_token):
        """수락 시 초대 역할로 계정 생성, 재사용 불가."""
        invitation = await _invite(client, admin_token)
        res = await client.post(
            f"{INVITATIONS}/{invitation['token']}",
            json={"name": "New Person", "password": "password123"},
        )
        assert res.status_code == 201
        data = res.json()
        assert data["email"] == "new@test.com"
        assert data["role"] == "editor"
        assert data["name"] == "New Person"

        login = await client.post("/api/v1/auth/login", json={"email": "new@test.com", "password": "password123"})
        assert login.status_code == 200

        reuse = await client.get(f"{INVITATIONS}/{invitation['token']}")
        assert reuse.status_code == 400
        assert reuse.json()["detail"] == "This invitation has already been used"

    async def test_accept_expired(self, client: AsyncClient, db, admin_token):
        """만료된 초대는 400."""
        invitation = await _invite(client, admin_token)
        row = (await db.execute(select(Invitation).where(Invitation.token == invitation["token"]))).scalar_one()
        row.expires_at = datetime.now(timezone.utc) - timedelta(hours=1)
        await db.flush()

        res = await client.post(
            f"{INVITATIONS}/{invitation['token']}",
            json={"name": "Late", "password": "password123"},
        )
        assert res.status_code == 400
        assert res.json()["detail"] == "This invitation has expired"

    async def test_accept_short_password(self, client: AsyncClient, admin_token):
        invitation = await _invite(client, admin_token)
        res = await client.post(f"{INVITATIONS}/{invitation['token']}", json={"name": "A", "password": "short"})
        assert res.status_code == 422


class TestRevokeInvitation:
    """초대 취소 테스트."""

    async def test_revoke(self, client: AsyncClient, admin_token):
        invitation = await _invite(client, admin_token)
        res = await client.delete(f"{INVITATIONS}/{invitation['id']}", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["message"] == "Invitation revoked successfully"

        verify = await client.get(f"{INVITATIONS}/{invitation['token']}")
        assert verify.status_code == 404

    async def test_revoke_missing(self, client: AsyncClient, admin_token):
        res = await client.delete(
            f"{INVITATIONS}/00000000-0000-0000-0000-000000000000",
            headers=auth_header(admin_token),
        )
        assert res.status_code == 404
