"""세션 라우터 — 로그인, 토큰 갱신, 로그아웃.

Session Router — Login, token renewal and logout endpoints.
Tokens are returned in the JSON body and as HTTP-only cookies.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Cookie, Depends, Response

from app.api.cookies import REFRESH_COOKIE, clear_token_cookies, set_token_cookies
from app.api.deps import get_auth_service, get_current_user
from app.models.user import User
from app.schemas.auth import LoginRequest, RenewRequest, TokenResponse
from app.services.auth_service import AuthService

router: APIRouter = APIRouter()


@router.post("", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """로그인 — 새 토큰 쌍 발급.

    Login endpoint. Issues a new token pair and sets both cookies.
    """
    result: TokenResponse = await auth_service.login(data)
    set_token_cookies(response, result, auth_service.codec)
    return result


@router.post("/renew", response_model=TokenResponse)
async def renew(
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    refresh_cookie: Annotated[str | None, Cookie(alias=REFRESH_COOKIE)] = None,
    data: Annotated[RenewRequest | None, Body()] = None,
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰 교체 후 새 토큰 쌍 발급.

    Renewal endpoint. The refresh token comes from the cookie, else the body.
    """
    presented: str | None = refresh_cookie or (data.refresh_token if data else None)
    result: TokenResponse = await auth_service.renew(presented)
    set_token_cookies(response, result, auth_service.codec)
    return result


@router.delete("")
async def logout(
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """로그아웃 — 저장된 리프레시 토큰 폐기 및 쿠키 삭제.

    Logout endpoint. Clears the stored refresh token and both cookies.
    """
    await auth_service.logout(current_user.id)
    clear_token_cookies(response)
    return {}
