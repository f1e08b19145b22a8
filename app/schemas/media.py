"""미디어 라이브러리 Pydantic 스키마.

Media library request/response schemas. Response shape is shared with
post media (``PostMediaResponse``).
"""

from pydantic import BaseModel, Field


class MediaCreate(BaseModel):
    """게시물에 연결되지 않은 미디어 항목 생성 요청."""

    url: str = Field(min_length=1)
    type: str = Field(pattern=r"^(image|video)$")  # image | video
    alt: str = ""


class MediaUpdate(BaseModel):
    """미디어 수정 요청 — alt 만 변경 가능 (Only alt is editable)."""

    alt: str | None = None


class UploadResponse(BaseModel):
    """업로드 응답 — 저장된 파일의 공개 URL."""

    url: str
