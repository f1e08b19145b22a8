"""이메일 발송 유틸리티 — SMTP (aiosmtplib).

SMTP 설정은 config.py의 SMTP_* 환경 변수로 관리.
"""

import re
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from app.config import settings
from app.utils.logger import logger

_TAG_RE = re.compile(r"<[^>]*>")


def html_to_text(html: str) -> str:
    """태그 제거로 만든 플레인텍스트 본문 — Plain-text body by stripping tags."""
    return _TAG_RE.sub("", html)


async def send_email(
    to: str,
    subject: str,
    html: str,
    text: str | None = None,
) -> None:
    """이메일 발송.

    Args:
        to: 수신자 이메일 주소
        subject: 제목
        html: HTML 본문
        text: 플레인텍스트 본문 (없으면 html에서 태그를 제거해 생성)

    Raises:
        aiosmtplib.SMTPException: SMTP 전송 실패
    """
    sender = settings.SMTP_FROM_EMAIL or settings.SMTP_USER
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = f"{settings.SMTP_FROM_NAME} <{sender}>"
    msg["To"] = to

    msg.attach(MIMEText(text if text is not None else html_to_text(html), "plain", "utf-8"))
    msg.attach(MIMEText(html, "html", "utf-8"))

    await aiosmtplib.send(
        msg,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER or None,
        password=settings.SMTP_PASSWORD or None,
        start_tls=True,
    )
    logger.info("Email sent to {} ({})", to, subject)


async def send_email_safely(
    to: str,
    subject: str,
    html: str,
    text: str | None = None,
) -> bool:
    """발송 실패가 요청을 깨뜨리지 않는 이메일 발송.

    Send an email, logging delivery failures instead of raising them.
    In debug mode the undelivered message is logged in full.

    Returns:
        bool: 발송 성공 여부 (Whether the message was handed to SMTP)
    """
    try:
        await send_email(to, subject, html, text)
        return True
    except (aiosmtplib.SMTPException, OSError) as exc:
        logger.error("Email delivery to {} failed: {}", to, exc)
        if settings.DEBUG:
            logger.debug("Undelivered email\nTo: {}\nSubject: {}\n{}", to, subject, html)
        return False
