"""파일 확장자 ↔ Content-Type 매핑 유틸리티.

File extension / content-type lookup used by uploads.
"""

import re

# 확장자 → Content-Type 매핑 — Extension to content-type table
FILE_EXTENSIONS: dict[str, str] = {
    "txt": "text/plain",
    "md": "text/markdown",
    "json": "application/json",
    "csv": "text/csv",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "mp3": "audio/mpeg",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    "zip": "application/zip",
    "rar": "application/vnd.rar",
    "tar": "application/x-tar",
    "gz": "application/gzip",
}

DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def get_extension(filename: str) -> str:
    """파일명의 소문자 확장자 (없으면 빈 문자열)."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def get_content_type(filename: str) -> str:
    """확장자로 Content-Type을 추정합니다 — Guess content type from extension."""
    return FILE_EXTENSIONS.get(get_extension(filename), DEFAULT_CONTENT_TYPE)


def sanitize_filename(filename: str) -> str:
    """경로 구분자와 특수문자를 제거한 안전한 파일명.

    Strip directories and collapse unsafe characters into ``-``.
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_CHARS.sub("-", name).strip("-.")
    return name or "file"
