"""토큰 쿠키 유틸리티 — 세션 토큰의 쿠키 전달.

Token cookie helpers. Both tokens travel as HTTP-only, secure cookies whose
lifetime matches the token's own expiry; the JSON body echoes them for
clients that cannot use cookies.
"""

from fastapi import Response

from app.schemas.auth import TokenResponse
from app.utils.jwt import TokenCodec, TokenKind

ACCESS_COOKIE: str = "accessToken"
REFRESH_COOKIE: str = "refreshToken"

_COOKIE_KINDS: dict[str, TokenKind] = {
    ACCESS_COOKIE: TokenKind.ACCESS,
    REFRESH_COOKIE: TokenKind.REFRESH,
}


def set_token_cookies(response: Response, tokens: TokenResponse, codec: TokenCodec) -> None:
    """두 토큰을 HttpOnly/Secure 쿠키로 설정합니다.

    Set both tokens as HttpOnly, Secure cookies with Max-Age equal to the token TTL.
    """
    values: dict[str, str] = {
        ACCESS_COOKIE: tokens.access_token,
        REFRESH_COOKIE: tokens.refresh_token,
    }
    for name, kind in _COOKIE_KINDS.items():
        response.set_cookie(
            key=name,
            value=values[name],
            max_age=int(codec.ttl(kind).total_seconds()),
            path="/",
            httponly=True,
            secure=True,
            samesite="lax",
        )


def clear_token_cookies(response: Response) -> None:
    """두 토큰 쿠키를 삭제합니다 (Expire both token cookies)."""
    for name in _COOKIE_KINDS:
        response.delete_cookie(
            key=name,
            path="/",
            httponly=True,
            secure=True,
            samesite="lax",
        )
