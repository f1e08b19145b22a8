"""스토리지 서비스 — S3 또는 로컬 파일 저장.

Storage Service — Stores uploaded media on S3 or local disk.
AWS 키가 비어있으면 자동으로 로컬 모드로 전환됩니다.
로컬 파일은 /uploads 경로로 정적 서빙됩니다.
"""

import time
from pathlib import Path

from app.config import settings
from app.utils.files import sanitize_filename
from app.utils.logger import logger

# 로컬 업로드 디렉토리 — .env의 LOCAL_UPLOADS_DIR 또는 <project>/uploads/
_SERVER_ROOT: Path = Path(__file__).resolve().parent.parent.parent


def uploads_dir() -> Path:
    """로컬 업로드 디렉토리 — Resolved on each call so settings overrides apply."""
    if settings.LOCAL_UPLOADS_DIR:
        return Path(settings.LOCAL_UPLOADS_DIR)
    return _SERVER_ROOT / "uploads"


class StorageService:
    """파일 업로드 서비스 — S3 또는 로컬 모드 자동 선택."""

    def __init__(self) -> None:
        self._client = None

    @property
    def is_local(self) -> bool:
        return not settings.AWS_ACCESS_KEY_ID or not settings.AWS_S3_BUCKET

    @property
    def client(self):
        if self.is_local:
            return None
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=settings.AWS_S3_REGION,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    def generate_key(self, filename: str) -> str:
        """저장 키 — ``{ms-timestamp}-{sanitized name}``."""
        return f"{int(time.time() * 1000)}-{sanitize_filename(filename)}"

    def public_url(self, key: str) -> str:
        """저장된 객체의 공개 URL — CloudFront, S3 bucket URL, or /uploads."""
        if self.is_local:
            return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/uploads/{key}"
        if settings.CLOUDFRONT_DOMAIN:
            return f"https://{settings.CLOUDFRONT_DOMAIN}/{key}"
        return f"https://{settings.AWS_S3_BUCKET}.s3.{settings.AWS_S3_REGION}.amazonaws.com/{key}"

    def save_local(self, key: str, data: bytes) -> Path:
        """로컬 파일 저장. 경로를 반환합니다."""
        path = uploads_dir() / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def upload(self, data: bytes, filename: str, content_type: str) -> str:
        """파일을 저장하고 공개 URL을 반환합니다.

        Args:
            data: 파일 바이트 (File bytes)
            filename: 원본 파일명 (Original client filename)
            content_type: MIME 타입 (Content type)

        Returns:
            str: 공개 URL (Public URL of the stored file)
        """
        key = self.generate_key(filename)

        if self.is_local:
            path = self.save_local(key, data)
            logger.info("Stored upload {} ({} bytes) at {}", key, len(data), path)
            return self.public_url(key)

        self.client.put_object(
            Bucket=settings.AWS_S3_BUCKET,
            Key=key,
            Body=data,
            ContentType=content_type,
            ACL="public-read",
        )
        logger.info("Uploaded {} ({} bytes) to s3://{}", key, len(data), settings.AWS_S3_BUCKET)
        return self.public_url(key)


storage_service: StorageService = StorageService()
