"""FastAPI 의존성 주입 모듈 — 인증 서비스 및 현재 사용자.

FastAPI dependency injection module — Auth service wiring and authentication.

Authentication Flow:
    1. accessToken 쿠키 또는 Authorization: Bearer 헤더에서 토큰 추출
       (Token taken from the accessToken cookie, else the Bearer header)
    2. AuthService.authenticate()가 액세스 토큰을 검증
       (Access token verified with the access-kind key)
    3. 토큰의 "sub"로 기본 키 조회 (User loaded by primary key from "sub")
"""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.cookies import ACCESS_COOKIE
from app.database import get_db
from app.models.user import User
from app.repositories.user_repository import UserCredentialStore
from app.services.auth_service import AuthService

# HTTP Bearer 토큰 추출기 — 없으면 None (쿠키 대체 경로 허용)
# Extracts the Bearer token; returns None when absent so the cookie can be used
security: HTTPBearer = HTTPBearer(auto_error=False)


def get_auth_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthService:
    """요청 세션에 바인딩된 인증 서비스를 생성합니다.

    Build an AuthService whose credential store is bound to the request session.
    """
    return AuthService(UserCredentialStore(db))


async def get_current_user(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    access_cookie: Annotated[str | None, Cookie(alias=ACCESS_COOKIE)] = None,
) -> User:
    """액세스 토큰에서 현재 인증된 사용자를 추출합니다.

    Return the user authenticated by the access token.

    Raises:
        UnauthenticatedError(401): 토큰 없음 (No token)
        InvalidTokenError(401): 유효하지 않은 토큰 (Invalid token)
        TokenExpiredError(401): 만료된 토큰 (Expired token)
    """
    token: str | None = access_cookie or (credentials.credentials if credentials else None)
    return await auth_service.authenticate(token)
