"""초기 관리자 시드 스크립트 — SUPERADMIN_EMAIL 계정 생성 또는 승격.

Seed script — Bootstraps the superadmin account.
Creates tables if missing, then creates (or promotes) the account named by
SUPERADMIN_EMAIL with SEED_ADMIN_PASSWORD. Safe to run repeatedly.

Usage:
    SUPERADMIN_EMAIL=admin@example.com SEED_ADMIN_PASSWORD=... python -m app.seed
"""

import asyncio
import sys

from app.config import settings
from app.database import Base, async_session, engine
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.schemas.auth import SuperadminRequest
from app.services.auth_service import auth_service
from app.utils.logger import logger, setup_logger


async def seed() -> int:
    """슈퍼관리자를 시드합니다. 종료 코드를 반환합니다.

    Returns:
        int: 0 on success, 1 when the required settings are missing
    """
    if not settings.SUPERADMIN_EMAIL or not settings.SEED_ADMIN_PASSWORD:
        logger.error("SUPERADMIN_EMAIL and SEED_ADMIN_PASSWORD must both be set")
        return 1

    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await auth_service.ensure_superadmin(
            db,
            SuperadminRequest(
                email=settings.SUPERADMIN_EMAIL,
                password=settings.SEED_ADMIN_PASSWORD,
            ),
        )
        await db.commit()

    logger.info("Superadmin {}: {}", result.user.email, result.status)
    await engine.dispose()
    return 0


if __name__ == "__main__":
    setup_logger()
    sys.exit(asyncio.run(seed()))
