"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly; the session lifecycle treats the hash as opaque and
only asks whether a supplied secret matches it.
"""

import bcrypt

from app.utils.exceptions import BadRequestError

# bcrypt 입력 한도 — bcrypt only looks at the first 72 bytes of input
_BCRYPT_MAX_BYTES: int = 72


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)

    Raises:
        BadRequestError: 72바이트 초과 비밀번호 (Password longer than 72 bytes)
    """
    raw: bytes = password.encode("utf-8")
    if len(raw) > _BCRYPT_MAX_BYTES:
        raise BadRequestError("Password must be at most 72 bytes long")
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash (constant time).
    Inputs that could never have been hashed, or a malformed stored hash,
    simply do not match.
    """
    raw: bytes = plain_password.encode("utf-8")
    if len(raw) > _BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, hashed_password.encode("utf-8"))
    except ValueError:
        return False
