"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session, and httpx client
fixtures. Each test gets a fresh schema; SMTP delivery is mocked and local
uploads go to a temporary directory.
"""

import os
import tempfile

# 앱 임포트 전에 환경 설정 — Environment must be set before the app is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOCAL_UPLOADS_DIR"] = tempfile.mkdtemp(prefix="cms-uploads-")
os.environ["AWS_ACCESS_KEY_ID"] = ""
os.environ["AWS_S3_BUCKET"] = ""
os.environ["CARD_API_BASE_URL"] = ""
os.environ["AXIOM_API_TOKEN"] = ""
os.environ["SUPERADMIN_EMAIL"] = "root@example.com"

from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.config import settings  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import *  # noqa: F401,F403,E402 — register all models with metadata
from app.utils.jwt import create_access_token  # noqa: E402
from app.utils.password import hash_password  # noqa: E402


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB 엔진을 만들고 스키마를 생성합니다."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def smtp_send(monkeypatch) -> AsyncMock:
    """SMTP 발송을 모킹합니다 — Record outgoing mail instead of sending it."""
    sender = AsyncMock(return_value=({}, "OK"))
    monkeypatch.setattr("app.utils.email.aiosmtplib.send", sender)
    return sender


@pytest.fixture
def uploads(tmp_path, monkeypatch):
    """로컬 업로드 디렉토리를 임시 경로로 지정합니다."""
    monkeypatch.setattr(settings, "LOCAL_UPLOADS_DIR", str(tmp_path))
    return tmp_path


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 사용자 생성
# ---------------------------------------------------------------------------
async def _create_user(db: AsyncSession, email: str, role: str, name: str, is_active: bool = True):
    from app.models.user import User
    user = User(
        email=email,
        name=name,
        role=role,
        password_hash=hash_password("password123"),
        is_active=is_active,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession):
    """관리자 사용자를 생성합니다."""
    return await _create_user(db, "admin@test.com", "admin", "Test Admin")


@pytest_asyncio.fixture
async def editor_user(db: AsyncSession):
    """에디터 사용자를 생성합니다."""
    return await _create_user(db, "editor@test.com", "editor", "Test Editor")


@pytest_asyncio.fixture
async def author_user(db: AsyncSession):
    """작성자 사용자를 생성합니다."""
    return await _create_user(db, "author@test.com", "author", "Test Author")


@pytest_asyncio.fixture
async def other_author(db: AsyncSession):
    return await _create_user(db, "other@test.com", "author", "Other Author")


@pytest_asyncio.fixture
async def inactive_user(db: AsyncSession):
    """비활성 사용자를 생성합니다."""
    return await _create_user(db, "inactive@test.com", "editor", "Inactive Editor", is_active=False)


def make_token(user) -> str:
    """테스트용 세션 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "is_active": user.is_active,
    })


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def editor_token(editor_user) -> str:
    return make_token(editor_user)


@pytest.fixture
def author_token(author_user) -> str:
    return make_token(author_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
