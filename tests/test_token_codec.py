"""토큰 코덱 테스트 — 발급/검증, 종류 분리, 만료 경계, 변조 감지.

Token codec tests — mint/verify, kind separation, expiry boundary, tampering.
"""

import base64
import json
import uuid
from datetime import timedelta

import jwt
import pytest

from app.utils.exceptions import InvalidTokenError, TokenExpiredError
from app.utils.jwt import TokenCodec, TokenKind


def _tamper_payload(token: str, **changes) -> str:
    """서명은 그대로 두고 페이로드만 바꿉니다 (re-encode payload, keep signature)."""
    header, payload, signature = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    claims = json.loads(base64.urlsafe_b64decode(padded))
    claims.update(changes)
    new_payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return f"{header}.{new_payload}.{signature}"


class TestRoundTrip:
    """발급 후 검증 테스트."""

    @pytest.mark.parametrize("kind", [TokenKind.ACCESS, TokenKind.REFRESH])
    def test_verify_returns_subject(self, codec: TokenCodec, kind):
        subject = uuid.uuid4()
        token = codec.mint(subject, kind)
        assert codec.verify(token, kind) == str(subject)

    def test_tokens_minted_in_same_instant_differ(self, codec: TokenCodec):
        """같은 시각에 발급해도 서로 다른 토큰."""
        subject = uuid.uuid4()
        assert codec.mint(subject, TokenKind.REFRESH) != codec.mint(subject, TokenKind.REFRESH)

    def test_ttl_per_kind(self, codec: TokenCodec):
        assert codec.ttl(TokenKind.ACCESS) == timedelta(minutes=15)
        assert codec.ttl(TokenKind.REFRESH) == timedelta(days=10)


class TestKindSeparation:
    """액세스/리프레시 토큰 교차 사용 거부."""

    def test_access_token_rejected_as_refresh(self, codec: TokenCodec):
        token = codec.mint(uuid.uuid4(), TokenKind.ACCESS)
        with pytest.raises(InvalidTokenError):
            codec.verify(token, TokenKind.REFRESH)

    def test_refresh_token_rejected_as_access(self, codec: TokenCodec):
        token = codec.mint(uuid.uuid4(), TokenKind.REFRESH)
        with pytest.raises(InvalidTokenError):
            codec.verify(token, TokenKind.ACCESS)

    def test_type_claim_checked_even_with_matching_key(self, clock):
        """키가 같더라도 type 클레임이 다르면 거부."""
        shared = TokenCodec(
            access_secret="same-secret-0123456789abcdef-0123",
            refresh_secret="same-secret-0123456789abcdef-0123",
            access_ttl=timedelta(minutes=5),
            refresh_ttl=timedelta(days=1),
            clock=clock,
        )
        token = shared.mint(uuid.uuid4(), TokenKind.ACCESS)
        with pytest.raises(InvalidTokenError):
            shared.verify(token, TokenKind.REFRESH)


class TestExpiry:
    """만료 경계 테스트."""

    def test_valid_just_before_expiry(self, codec: TokenCodec, clock):
        token = codec.mint("user-1", TokenKind.ACCESS)
        clock.advance(timedelta(minutes=15) - timedelta(milliseconds=1))
        assert codec.verify(token, TokenKind.ACCESS) == "user-1"

    def test_expired_at_exact_expiry_instant(self, codec: TokenCodec, clock):
        token = codec.mint("user-1", TokenKind.ACCESS)
        clock.advance(timedelta(minutes=15))
        with pytest.raises(TokenExpiredError):
            codec.verify(token, TokenKind.ACCESS)

    def test_expired_one_tick_after(self, codec: TokenCodec, clock):
        token = codec.mint("user-1", TokenKind.REFRESH)
        clock.advance(timedelta(days=10, seconds=1))
        with pytest.raises(TokenExpiredError):
            codec.verify(token, TokenKind.REFRESH)

    def test_expired_is_distinct_from_invalid(self, codec: TokenCodec, clock):
        token = codec.mint("user-1", TokenKind.ACCESS)
        clock.advance(timedelta(hours=1))
        with pytest.raises(TokenExpiredError) as exc_info:
            codec.verify(token, TokenKind.ACCESS)
        assert not isinstance(exc_info.value, InvalidTokenError)
        assert exc_info.value.headers["X-Auth-Error"] == "token_expired"


class TestTampering:
    """변조 및 구조 오류 감지."""

    def test_extended_expiry_breaks_signature(self, codec: TokenCodec, clock):
        token = codec.mint("user-1", TokenKind.ACCESS)
        forged = _tamper_payload(token, exp=int(clock.now.timestamp()) + 10**6)
        with pytest.raises(InvalidTokenError):
            codec.verify(forged, TokenKind.ACCESS)

    def test_changed_subject_breaks_signature(self, codec: TokenCodec):
        token = codec.mint("user-1", TokenKind.REFRESH)
        forged = _tamper_payload(token, sub="user-2")
        with pytest.raises(InvalidTokenError):
            codec.verify(forged, TokenKind.REFRESH)

    def test_foreign_key_rejected(self, codec: TokenCodec, clock):
        now = int(clock.now.timestamp())
        token = jwt.encode(
            {"sub": "user-1", "iat": now, "exp": now + 60, "type": "access"},
            "some-other-secret-0123456789abcdef",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            codec.verify(token, TokenKind.ACCESS)

    def test_missing_type_claim_rejected(self, codec: TokenCodec, clock):
        now = int(clock.now.timestamp())
        token = jwt.encode(
            {"sub": "user-1", "iat": now, "exp": now + 60},
            "unit-access-secret-0123456789abcdef",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            codec.verify(token, TokenKind.ACCESS)

    @pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "invalid.jwt.token"])
    def test_garbage_rejected(self, codec: TokenCodec, garbage):
        with pytest.raises(InvalidTokenError):
            codec.verify(garbage, TokenKind.REFRESH)
