"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, token renewal, registration and the current user profile.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# 공통 설정 — camelCase 별칭, 파이썬 이름으로도 입력 허용
# Shared config: camelCase aliases, python names accepted on input
_CAMEL: ConfigDict = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema.

    Attributes:
        identifier: 사용자명 또는 이메일 (Username or email)
        secret: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    model_config = _CAMEL

    identifier: str = Field(min_length=1, max_length=255)  # 사용자명 또는 이메일 (Username or email)
    secret: str = Field(min_length=1)  # 비밀번호 — 평문 (Plain text password)

    @field_validator("identifier")
    @classmethod
    def _strip_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("identifier must not be blank")
        return value


class RenewRequest(BaseModel):
    """토큰 갱신 요청 스키마.

    Token renewal request schema. The body is a fallback: the refresh token
    cookie takes precedence when both are present.

    Attributes:
        refresh_token: 기존 리프레시 토큰 (Current refresh token, optional in body)
    """

    model_config = _CAMEL

    refresh_token: str | None = None  # 기존 리프레시 토큰 (Current refresh token)


class TokenResponse(BaseModel):
    """토큰 발급 응답 스키마.

    Token issuance response schema.
    Returned after successful login or token renewal.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
    """

    model_config = _CAMEL

    access_token: str  # JWT 액세스 토큰 (Access token)
    refresh_token: str  # JWT 리프레시 토큰 (Refresh token)


class RegisterRequest(BaseModel):
    """회원가입 요청 스키마.

    User registration request schema. Media is uploaded to external object
    storage beforehand; only the resulting URLs are sent here.

    Attributes:
        full_name: 실명 (Full display name)
        email: 이메일 (Email address, unique)
        username: 사용자 아이디 (Login username, unique, stored lower-case)
        password: 비밀번호 (Plain text, will be bcrypt-hashed on server)
        avatar: 아바타 URL (Avatar URL, optional)
        cover_image: 커버 이미지 URL (Cover image URL, optional)
    """

    model_config = _CAMEL

    full_name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    username: str = Field(max_length=100)
    password: str
    avatar: str | None = Field(default=None, max_length=1024)
    cover_image: str | None = Field(default=None, max_length=1024)

    @field_validator("full_name", "email", "username", "password")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("All fields are required")
        return value

    @field_validator("email", "username")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("email")
    @classmethod
    def _looks_like_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value

    @field_validator("username")
    @classmethod
    def _no_at_sign(cls, value: str) -> str:
        # 로그인 식별자가 이메일과 겹치지 않도록 — keep usernames distinguishable from emails
        if "@" in value:
            raise ValueError("username must not contain '@'")
        return value


class UserResponse(BaseModel):
    """사용자 프로필 응답 스키마.

    User profile response schema. Never includes the password hash or
    the stored refresh token.
    """

    model_config = _CAMEL

    id: str
    username: str
    email: str
    full_name: str
    avatar: str | None = None
    cover_image: str | None = None
    created_at: datetime | None = None
