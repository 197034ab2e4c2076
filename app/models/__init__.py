"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations.

Modules:
    user: 사용자 계정 및 리프레시 토큰 (User accounts and their live refresh token)
"""

from app.models.user import User

__all__ = [
    "User",
]
