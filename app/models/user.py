"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
The user row is the principal of the session lifecycle: besides profile
data it mirrors the single live refresh token of the user.

Tables:
    - users: 사용자 계정 (User accounts with the live refresh token)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Username and email are globally unique and stored lower-case.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        username: 로그인 아이디 (Login username, unique, lower-case)
        email: 이메일 (Email address, unique, lower-case)
        full_name: 실명 (Full display name)
        avatar: 아바타 이미지 URL (Avatar URL from external object storage)
        cover_image: 커버 이미지 URL (Cover image URL, optional)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        refresh_token: 현재 유효한 리프레시 토큰 (Live refresh token; NULL means no session)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디 — Login username (전역 고유, globally unique)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    # 이메일 — Email address (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    # 실명 — User's full display name
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 아바타 URL — Avatar URL (업로드는 외부 스토리지, upload handled externally)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    # 커버 이미지 URL — Cover image URL
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 리프레시 토큰 — Live refresh token, always written as a full overwrite
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
