"""사용자 라우터 — 회원가입 및 현재 사용자 조회.

Users Router — Registration and current user profile endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_auth_service, get_current_user
from app.models.user import User
from app.schemas.auth import RegisterRequest, UserResponse
from app.services.auth_service import AuthService, to_user_response

router: APIRouter = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    data: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """회원가입 — 새 사용자 계정 생성 (세션은 열지 않음).

    Registration endpoint. Creates an account without opening a session.
    """
    return await auth_service.register(data)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """현재 사용자 프로필 조회.

    Get the profile of the currently authenticated user.
    """
    return to_user_response(current_user)
