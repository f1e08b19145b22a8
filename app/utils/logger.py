"""애플리케이션 로거 — loguru 설정.

Application logger configured with loguru.
Request/response logging goes to Axiom via middleware; this logger covers
application events (mail delivery, uploads, invitations, unhandled errors).
"""

import sys

from loguru import logger

from app.config import settings

_CONSOLE_FORMAT: str = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def setup_logger(level: str | None = None) -> None:
    """콘솔 로거를 (재)설정합니다 — Reconfigure the console sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        format=_CONSOLE_FORMAT,
        level=level or settings.LOG_LEVEL,
        colorize=True,
        backtrace=settings.DEBUG,
        diagnose=False,
    )


__all__ = ["logger", "setup_logger"]
