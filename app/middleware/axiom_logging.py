"""Axiom API 로깅 미들웨어.

Axiom request logging middleware.
Captures method, path, params, JSON body, status and error reason for each
API call and ships it to Axiom. Sensitive fields (password, token, secret,
cookie) are masked; multipart upload bodies are never read.
Without Axiom credentials the same event is written to the application
logger at DEBUG level.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.utils.logger import logger

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and params
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|cookie|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
_SKIP_PREFIXES = ("/uploads/",)

_MAX_BODY_CHARS = 2000
_MAX_ERROR_CHARS = 500


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive keys."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > _MAX_BODY_CHARS:
        # 게시물 본문 등 긴 값 절단 — Truncate long values such as post bodies
        return data[:_MAX_BODY_CHARS] + "...(truncated)"
    return data


def _error_detail(body: bytes) -> str:
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        text = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    return text[:_MAX_ERROR_CHARS]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    def _skip(self, path: str) -> bool:
        return path in _SKIP_PATHS or path.startswith(_SKIP_PREFIXES)

    async def _read_body(self, request: Request) -> Any:
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        if "multipart/form-data" in request.headers.get("content-type", ""):
            return "(multipart body)"
        body_bytes = await request.body()
        if not body_bytes:
            return None
        try:
            return _mask(json.loads(body_bytes))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            logger.debug("{method} {path} -> {status_code} ({duration_ms} ms)", **event)
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:  # noqa: BLE001
            # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
            logger.warning("Axiom ingest failed: {}", exc)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._skip(request.url.path):
            return await call_next(request)

        start_time = time.perf_counter()
        request_body = await self._read_body(request)

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 후 응답 재구성 — Capture error reason, re-wrap body
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_detail(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
            if request.query_params:
                event["query_params"] = _mask(dict(request.query_params))
            if request.path_params:
                event["path_params"] = request.path_params
            if request_body is not None:
                event["request_body"] = request_body
            if error_detail:
                event["error"] = error_detail
            self._emit(event)

        return response
