"""미디어 서비스 — 미디어 라이브러리 및 파일 업로드 비즈니스 로직.

Media Service — Media library CRUD and file uploads.
Uploaded bytes go through ``storage_service`` (S3 or local disk); the
library itself stores only URLs.
"""

import asyncio
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.post import MEDIA_TYPES, PostMedia
from app.repositories.media_repository import media_repository
from app.schemas.media import MediaCreate, MediaUpdate, UploadResponse
from app.schemas.post import PostMediaResponse
from app.services.post_service import media_to_response
from app.services.storage_service import storage_service
from app.utils.exceptions import BadRequestError, NotFoundError, PayloadTooLargeError
from app.utils.files import get_content_type
from app.utils.logger import logger

# 업로드 읽기 단위 — Read uploads in 1 MiB chunks
_CHUNK_SIZE: int = 1024 * 1024


class MediaService:
    """미디어 관련 비즈니스 로직을 처리하는 서비스."""

    async def _get(self, db: AsyncSession, media_id: UUID) -> PostMedia:
        item: PostMedia | None = await media_repository.get_by_id(db, media_id)
        if item is None:
            raise NotFoundError("Media item not found")
        return item

    async def list_media(
        self,
        db: AsyncSession,
        media_type: str | None = None,
    ) -> list[PostMediaResponse]:
        """미디어 목록 — 최신순, 선택적 유형 필터."""
        if media_type is not None and media_type not in MEDIA_TYPES:
            raise BadRequestError("Invalid media type")
        items = await media_repository.list_newest_first(db, media_type)
        return [media_to_response(m) for m in items]

    async def get_media(self, db: AsyncSession, media_id: UUID) -> PostMediaResponse:
        return media_to_response(await self._get(db, media_id))

    async def create_media(self, db: AsyncSession, data: MediaCreate) -> PostMediaResponse:
        """게시물에 연결되지 않은 미디어 항목을 생성합니다."""
        item: PostMedia = await media_repository.create(db, {
            "url": data.url,
            "type": data.type,
            "alt": data.alt or "",
        })
        return media_to_response(item)

    async def update_media(
        self,
        db: AsyncSession,
        media_id: UUID,
        data: MediaUpdate,
    ) -> PostMediaResponse:
        """미디어 수정 — alt 만 변경됩니다."""
        item = await self._get(db, media_id)
        if data.alt is not None:
            item = await media_repository.update(db, item, {"alt": data.alt})
        return media_to_response(item)

    async def delete_media(self, db: AsyncSession, media_id: UUID) -> None:
        item = await self._get(db, media_id)
        await media_repository.delete(db, item)
        logger.info("Media {} deleted", media_id)

    async def upload(self, file: UploadFile | None) -> UploadResponse:
        """업로드 파일을 저장하고 공개 URL을 반환합니다.

        Raises:
            BadRequestError: 파일 없음 또는 빈 파일 (No file provided)
            PayloadTooLargeError: MAX_UPLOAD_SIZE_MB 초과 (413)
        """
        if file is None or not file.filename:
            raise BadRequestError("No file provided")

        limit = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
        chunks: list[bytes] = []
        size = 0
        while chunk := await file.read(_CHUNK_SIZE):
            size += len(chunk)
            if size > limit:
                raise PayloadTooLargeError(
                    f"File exceeds the {settings.MAX_UPLOAD_SIZE_MB} MB upload limit"
                )
            chunks.append(chunk)

        if size == 0:
            raise BadRequestError("No file provided")

        content_type = file.content_type
        if not content_type or content_type == "application/octet-stream":
            content_type = get_content_type(file.filename)

        # 동기 저장소 호출은 executor 에서 실행 (boto3 / disk I/O off the event loop)
        loop = asyncio.get_running_loop()
        url = await loop.run_in_executor(
            None,
            lambda: storage_service.upload(b"".join(chunks), file.filename, content_type),
        )
        return UploadResponse(url=url)


# 싱글턴 인스턴스 — Singleton instance
media_service: MediaService = MediaService()
