"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and routers.
Configures logging, CORS for the dashboard frontend, a health check,
the local uploads mount, and the /api/v1 router.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError

from app.api.v1 import api_router
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.services.storage_service import storage_service, uploads_dir
from app.utils.logger import logger, setup_logger

setup_logger()

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# Registered before CORS to capture all requests
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — 세션 쿠키 전송을 위해 credentials 허용
# Credentials are allowed so the session cookie reaches the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """DB 제약 위반을 409로 변환 — Map constraint violations to 409."""
    message: str = str(exc.orig).lower()
    logger.warning("Integrity error on {} {}: {}", request.method, request.url.path, message)
    if "unique" in message or "duplicate" in message:
        return JSONResponse(status_code=409, content={"detail": "Resource already exists"})
    if "foreign key" in message:
        return JSONResponse(status_code=409, content={"detail": "Related resource constraint violated"})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# 로컬 저장소 사용 시 업로드 파일 제공 — Serve uploads when S3 is not configured
if storage_service.is_local:
    _uploads = uploads_dir()
    _uploads.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=_uploads, check_dir=False), name="uploads")

app.include_router(api_router, prefix="/api/v1")
