"""UTC 시간 헬퍼.

UTC time helpers. Some drivers (SQLite) hand back naive datetimes for
``DateTime(timezone=True)`` columns; values are always written in UTC.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """naive datetime을 UTC로 간주 — Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_display_date(value: datetime) -> str:
    """대시보드 표시용 날짜 — e.g. "Mar 7, 2025"."""
    return f"{value:%b} {value.day}, {value.year}"
