"""카드 서비스 — 카드 블록 데이터 조회.

Card Service — Resolves card block ids to card data.
CARD_API_BASE_URL 이 설정되면 외부 API에서 조회하고, 없으면 기본 카드를 반환합니다.
"""

from typing import Any
from urllib.parse import quote

import httpx

from app.config import settings
from app.utils.exceptions import BadGatewayError
from app.utils.logger import logger

# 기본 카드 — Placeholder card served when no card source is configured
DEFAULT_CARD: dict[str, str] = {
    "title": "Family Fun: Universal",
    "description": "Resorts • Clubs • Beach",
    "price": "₹29,000",
    "image": "https://example.com/image.jpg",
    "link": "https://example.com/explore",
}


class CardService:
    """카드 데이터 조회 서비스."""

    @property
    def is_remote(self) -> bool:
        return bool(settings.CARD_API_BASE_URL)

    async def get_card(self, card_id: str) -> dict[str, Any]:
        """카드 ID로 카드 데이터를 조회합니다.

        Args:
            card_id: 카드 식별자 (Card identifier from the post body)

        Returns:
            dict: {id, title, description, price, image, link}

        Raises:
            BadGatewayError: 외부 API 오류 또는 연결 실패 (502)
        """
        if not self.is_remote:
            return {"id": card_id, **DEFAULT_CARD}

        url = f"{settings.CARD_API_BASE_URL.rstrip('/')}/{quote(card_id, safe='')}"
        try:
            async with httpx.AsyncClient(timeout=settings.CARD_API_TIMEOUT) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Card {} could not be fetched: {}", card_id, exc)
            raise BadGatewayError("Card service unavailable") from exc

        if not isinstance(data, dict):
            raise BadGatewayError("Card service returned an invalid payload")
        return {"id": card_id, **data}


card_service: CardService = CardService()
