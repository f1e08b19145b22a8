"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly with 10 rounds, matching hashes issued by the
previous dashboard so existing accounts keep working.
"""

import bcrypt

# bcrypt cost factor — 기존 계정 해시와 동일 (Same cost as existing account hashes)
BCRYPT_ROUNDS: int = 10


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.
    Accounts without a stored hash never verify.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        hashed_password: 저장된 bcrypt 해시 (Stored bcrypt hash, may be empty)

    Returns:
        bool: 일치하면 True (True if password matches hash)
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # 손상된 해시 — Malformed stored hash
        return False
