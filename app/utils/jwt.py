"""JWT 토큰 코덱 모듈 — 액세스/리프레시 토큰 발급 및 검증.

JWT token codec module.
Mints and verifies the two token kinds used by the session lifecycle.
Each kind has its own signing key and lifetime, so an access token can
never pass as a refresh token (and vice versa) even though both share
the same claim layout.

JWT Payload Structure:
    {
        "sub": "user_uuid",          # 사용자 ID (Principal identifier)
        "iat": 1234567000,           # 발급 시각 UNIX timestamp (Issued-at)
        "exp": 1234567890,           # 만료 시각 UNIX timestamp (Expiration)
        "type": "access"|"refresh",  # 토큰 유형 (Token kind discriminator)
        "jti": "hex"                 # 고유 토큰 ID (Unique token id)
    }
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

import jwt

from app.config import Settings, settings
from app.utils.exceptions import InvalidTokenError, TokenExpiredError

_REQUIRED_CLAIMS: list[str] = ["sub", "iat", "exp", "type"]


class TokenKind(str, Enum):
    """토큰 종류 — Token kind (selects signing key and lifetime)."""

    ACCESS = "access"
    REFRESH = "refresh"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """서명된 시간 제한 토큰을 발급하고 검증하는 코덱.

    Codec that mints and verifies signed, time-bounded tokens.
    Stateless: depends only on configured secrets and the clock.

    Attributes:
        algorithm: JWT 서명 알고리즘 (HMAC algorithm, e.g. "HS256")
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta,
        refresh_ttl: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """코덱을 초기화합니다.

        Initialize the codec with kind-specific keys and lifetimes.

        Args:
            access_secret: 액세스 토큰 서명 키 (Access token signing key)
            refresh_secret: 리프레시 토큰 서명 키 (Refresh token signing key)
            access_ttl: 액세스 토큰 수명 (Access token lifetime)
            refresh_ttl: 리프레시 토큰 수명 (Refresh token lifetime)
            algorithm: JWT 서명 알고리즘 (Signing algorithm)
            clock: 현재 UTC 시각 공급자 (Returns the current aware UTC datetime)
        """
        self._secrets: dict[TokenKind, str] = {
            TokenKind.ACCESS: access_secret,
            TokenKind.REFRESH: refresh_secret,
        }
        self._ttls: dict[TokenKind, timedelta] = {
            TokenKind.ACCESS: access_ttl,
            TokenKind.REFRESH: refresh_ttl,
        }
        self.algorithm: str = algorithm
        self._clock: Callable[[], datetime] = clock

    @classmethod
    def from_settings(
        cls,
        cfg: Settings = settings,
        clock: Callable[[], datetime] = _utc_now,
    ) -> "TokenCodec":
        """설정 객체로부터 코덱을 생성합니다.

        Build a codec from application settings.
        """
        return cls(
            access_secret=cfg.ACCESS_TOKEN_SECRET,
            refresh_secret=cfg.REFRESH_TOKEN_SECRET,
            access_ttl=timedelta(minutes=cfg.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=cfg.REFRESH_TOKEN_EXPIRE_DAYS),
            algorithm=cfg.JWT_ALGORITHM,
            clock=clock,
        )

    def ttl(self, kind: TokenKind) -> timedelta:
        """토큰 종류별 수명을 반환합니다 (Lifetime of the given token kind)."""
        return self._ttls[kind]

    def mint(self, subject_id: UUID | str, kind: TokenKind) -> str:
        """서명된 토큰을 발급합니다.

        Mint a signed token for the subject with the kind-specific key and TTL.

        Args:
            subject_id: 토큰 주체 ID (Principal identifier)
            kind: 토큰 종류 (Token kind)

        Returns:
            str: 인코딩된 JWT 문자열 (Encoded JWT string)
        """
        issued_at: datetime = self._clock()
        expires_at: datetime = issued_at + self._ttls[kind]
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "type": kind.value,
            # 같은 초에 발급된 토큰도 서로 다른 문자열이 되도록 — distinct per mint
            "jti": uuid4().hex,
        }
        return jwt.encode(payload, self._secrets[kind], algorithm=self.algorithm)

    def verify(self, token: str, kind: TokenKind) -> str:
        """토큰을 검증하고 주체 ID를 반환합니다.

        Verify the token signature, kind and expiry, then return its subject.
        The expiry instant itself counts as expired.

        Args:
            token: 인코딩된 JWT 문자열 (Encoded JWT string)
            kind: 기대하는 토큰 종류 (Expected token kind)

        Returns:
            str: 토큰 주체 ID (Subject identifier)

        Raises:
            InvalidTokenError: 서명/구조/종류 불일치 (Bad signature, structure or kind)
            TokenExpiredError: 만료된 토큰 (Token past its expiry)
        """
        try:
            # 만료 검사는 주입된 clock으로 직접 수행 — expiry checked below against self._clock
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.PyJWTError:
            raise InvalidTokenError()

        if payload.get("type") != kind.value:
            raise InvalidTokenError("Wrong token type")

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError()
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise InvalidTokenError()

        if self._clock().timestamp() >= expires_at:
            raise TokenExpiredError()
        return subject


# 전역 코덱 인스턴스 — Codec built from the global settings
token_codec: TokenCodec = TokenCodec.from_settings()
