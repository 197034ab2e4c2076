"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates all endpoints into a single router
for inclusion in the FastAPI application.

Included routers:
    - session: 로그인, 토큰 갱신, 로그아웃 (Login, renewal, logout)
    - users: 회원가입, 내 프로필 (Registration, current user)
"""

from fastapi import APIRouter

from app.api.session import router as session_router
from app.api.users import router as users_router

api_router: APIRouter = APIRouter()

api_router.include_router(session_router, prefix="/session", tags=["Session"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
