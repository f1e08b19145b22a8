"""카드 라우터 — 카드 블록 데이터 조회."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.common import CardResponse
from app.services.card_service import card_service

router: APIRouter = APIRouter()


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: str,
    _: Annotated[User, Depends(get_current_user)],
) -> CardResponse:
    """카드 데이터 — 외부 소스 실패 시 502."""
    return CardResponse(**await card_service.get_card(card_id))
