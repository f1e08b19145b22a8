"""미디어 라우터 — 미디어 라이브러리 CRUD 및 파일 업로드.

Media Router — Library CRUD under /media and multipart upload under /upload.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.media import MediaCreate, MediaUpdate, UploadResponse
from app.schemas.post import PostMediaResponse
from app.services.media_service import media_service

router: APIRouter = APIRouter()
upload_router: APIRouter = APIRouter()


@router.get("", response_model=list[PostMediaResponse])
async def list_media(
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
    type: Annotated[str | None, Query(description="image | video")] = None,
) -> list[PostMediaResponse]:
    """미디어 목록 (최신순)."""
    return await media_service.list_media(db, type)


@router.post("", response_model=PostMediaResponse, status_code=201)
async def create_media(
    data: MediaCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> PostMediaResponse:
    """게시물에 연결되지 않은 미디어 항목 생성."""
    result: PostMediaResponse = await media_service.create_media(db, data)
    await db.commit()
    return result


@router.get("/{media_id}", response_model=PostMediaResponse)
async def get_media(
    media_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> PostMediaResponse:
    return await media_service.get_media(db, media_id)


@router.patch("/{media_id}", response_model=PostMediaResponse)
async def update_media(
    media_id: UUID,
    data: MediaUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> PostMediaResponse:
    """미디어 alt 수정."""
    result: PostMediaResponse = await media_service.update_media(db, media_id, data)
    await db.commit()
    return result


@router.delete("/{media_id}", response_model=MessageResponse)
async def delete_media(
    media_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    _: Annotated[User, Depends(get_current_user)],
) -> MessageResponse:
    await media_service.delete_media(db, media_id)
    await db.commit()
    return MessageResponse(message="Media item deleted successfully")


@upload_router.post("", response_model=UploadResponse)
async def upload_file(
    _: Annotated[User, Depends(get_current_user)],
    file: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """파일 업로드 — S3 또는 로컬 디스크에 저장 후 URL 반환."""
    return await media_service.upload(file)
