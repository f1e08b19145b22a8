"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schemas shared across API domains.
"""

from pydantic import BaseModel, ConfigDict


class MessageResponse(BaseModel):
    """단순 메시지 응답 — e.g. {"message": "Post deleted"}."""

    message: str


class CardResponse(BaseModel):
    """카드 데이터 응답 — 외부 소스의 추가 필드는 그대로 전달."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: str | None = None
    description: str | None = None
    price: str | None = None
    image: str | None = None
    link: str | None = None
