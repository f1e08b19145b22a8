"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses raised by services so that
call sites never spell out status codes.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Post not found")
    raise DuplicateError("Email already exists")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found — 요청한 리소스가 없음 (post, media, user, invitation...)."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 고유 제약 위반 시 사용.

    Raised when a create/update would violate a uniqueness constraint
    (duplicate email, duplicate slug).
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 또는 비활성 계정.

    Raised when the authenticated user lacks the required role,
    acts on another user's account, or has been deactivated.
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 세션 없음, 만료, 잘못된 자격 증명."""

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — Pydantic이 잡지 못하는 비즈니스 검증 실패.

    e.g. invalid status value, expired invitation, wrong current password.
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PayloadTooLargeError(HTTPException):
    """413 — 업로드 파일 크기 초과 (Uploaded file exceeds the size limit)."""

    def __init__(self, detail: str = "File too large") -> None:
        super().__init__(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=detail)


class BadGatewayError(HTTPException):
    """502 — 외부 카드 데이터 소스 실패 (Upstream card source failed)."""

    def __init__(self, detail: str = "Upstream service error") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
