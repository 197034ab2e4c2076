"""인증 서비스 — 로그인, 토큰 갱신, 로그아웃, 회원가입 비즈니스 로직.

Auth Service — Business logic of the identity session lifecycle.
Mints access/refresh token pairs, rotates the refresh token on every
renewal and is the only writer of the user's stored refresh token.

Session states per user (observed through ``users.refresh_token``):
    NoSession (NULL) --login--> Active --renew--> Active --logout--> NoSession
"""

import logging
from uuid import UUID

from app.config import settings
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from app.services.ports import CredentialStore
from app.utils.exceptions import (
    BadCredentialError,
    DuplicateError,
    InvalidTokenError,
    NotFoundError,
    TokenReuseError,
    UnauthenticatedError,
)
from app.utils.jwt import TokenCodec, TokenKind, token_codec
from app.utils.password import hash_password

logger = logging.getLogger(__name__)


def to_user_response(user: User) -> UserResponse:
    """사용자 모델을 응답 스키마로 변환합니다 (secrets excluded)."""
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar=user.avatar,
        cover_image=user.cover_image,
        created_at=user.created_at,
    )


class AuthService:
    """인증 세션 수명주기를 처리하는 서비스.

    Service handling the session lifecycle: login, renewal with rotation,
    logout, access token authentication and registration.

    Attributes:
        store: 자격 증명 저장소 (Credential store collaborator)
        codec: 토큰 코덱 (Token codec)
        hide_unknown_identifier: 미존재 사용자를 401로 응답할지 여부
                                 (Answer unknown identifiers with 401 instead of 404)
    """

    def __init__(
        self,
        store: CredentialStore,
        codec: TokenCodec = token_codec,
        hide_unknown_identifier: bool | None = None,
    ) -> None:
        self.store: CredentialStore = store
        self.codec: TokenCodec = codec
        if hide_unknown_identifier is None:
            hide_unknown_identifier = settings.LOGIN_HIDE_UNKNOWN_IDENTIFIER
        self.hide_unknown_identifier: bool = hide_unknown_identifier

    def _mint_pair(self, user_id: UUID) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰 쌍을 생성합니다 (in memory only)."""
        return TokenResponse(
            access_token=self.codec.mint(user_id, TokenKind.ACCESS),
            refresh_token=self.codec.mint(user_id, TokenKind.REFRESH),
        )

    @staticmethod
    def _parse_subject(subject: str) -> UUID:
        try:
            return UUID(subject)
        except ValueError:
            raise InvalidTokenError("Invalid token subject")

    async def login(self, data: LoginRequest) -> TokenResponse:
        """로그인을 처리하고 새 토큰 쌍을 발급합니다.

        Verify credentials, mint a fresh pair and overwrite the stored
        refresh token. Failed logins perform no write.

        Args:
            data: 로그인 요청 데이터 (Login request data)

        Returns:
            TokenResponse: 토큰 응답 (Token response)

        Raises:
            NotFoundError: 존재하지 않는 사용자 (Unknown identifier, or deleted before the write)
            BadCredentialError: 잘못된 비밀번호, 또는 숨김 정책의 미존재 사용자
                                (Wrong secret, or unknown identifier when hidden)
        """
        user: User | None = await self.store.find_by_identifier(data.identifier)
        if user is None:
            logger.info("Login rejected: unknown identifier")
            if self.hide_unknown_identifier:
                raise BadCredentialError()
            raise NotFoundError("User does not exist")

        if not await self.store.verify_secret(user, data.secret):
            logger.info("Login rejected: bad credential for user %s", user.id)
            raise BadCredentialError()

        pair: TokenResponse = self._mint_pair(user.id)
        # 기존 세션을 덮어씀 — overwrite supersedes any previous refresh token
        if not await self.store.set_refresh_token(user.id, pair.refresh_token):
            # 조회 후 사용자 행이 삭제됨 — the row vanished after lookup, nothing was persisted
            logger.warning("Login aborted: user %s disappeared before session write", user.id)
            raise NotFoundError("User does not exist")
        return pair

    async def renew(self, presented_token: str | None) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다 (rotation).

        Issue a new pair for a live refresh token and rotate the stored value.
        The stored value is swapped with a single compare-and-set, so a
        superseded, logged-out or concurrently rotated token is rejected.

        Args:
            presented_token: 제시된 리프레시 토큰 (Presented refresh token, may be None)

        Returns:
            TokenResponse: 새 토큰 응답 (New token response)

        Raises:
            UnauthenticatedError: 토큰 미제공 (No token presented)
            InvalidTokenError: 서명 오류 또는 알 수 없는 사용자 (Bad token or unknown subject)
            TokenExpiredError: 만료된 토큰 (Expired token)
            TokenReuseError: 이미 교체되었거나 로그아웃된 토큰 (Superseded or logged out)
        """
        if not presented_token:
            raise UnauthenticatedError()

        subject: str = self.codec.verify(presented_token, TokenKind.REFRESH)
        user: User | None = await self.store.get_by_id(self._parse_subject(subject))
        if user is None:
            raise InvalidTokenError("Invalid refresh token")

        pair: TokenResponse = self._mint_pair(user.id)
        swapped: bool = await self.store.compare_and_set_refresh_token(
            user.id, presented_token, pair.refresh_token
        )
        if not swapped:
            logger.warning("Stale or reused refresh token presented for user %s", user.id)
            raise TokenReuseError()
        return pair

    async def logout(self, principal_id: UUID) -> None:
        """로그아웃 처리 — 저장된 리프레시 토큰을 삭제합니다.

        Clear the stored refresh token. Idempotent.
        """
        await self.store.set_refresh_token(principal_id, None)

    async def authenticate(self, access_token: str | None) -> User:
        """액세스 토큰으로 현재 사용자를 확인합니다.

        Resolve the user behind an access token.

        Raises:
            UnauthenticatedError: 토큰 미제공 (No token presented)
            InvalidTokenError: 서명 오류 또는 알 수 없는 사용자 (Bad token or unknown subject)
            TokenExpiredError: 만료된 토큰 (Expired token)
        """
        if not access_token:
            raise UnauthenticatedError()

        subject: str = self.codec.verify(access_token, TokenKind.ACCESS)
        user: User | None = await self.store.get_by_id(self._parse_subject(subject))
        if user is None:
            raise InvalidTokenError("Invalid access token")
        return user

    async def register(self, data: RegisterRequest) -> UserResponse:
        """사용자 회원가입을 처리합니다.

        Create a user account. Registration does not open a session.

        Raises:
            DuplicateError: 사용자명 또는 이메일 중복 (Username or email already used)
        """
        if await self.store.username_or_email_taken(data.username, data.email):
            raise DuplicateError("User with this email or username already exists")

        user: User = await self.store.create_user(
            {
                "full_name": data.full_name.strip(),
                "email": data.email,
                "username": data.username,
                "password_hash": hash_password(data.password),
                "avatar": data.avatar,
                "cover_image": data.cover_image,
            }
        )
        return to_user_response(user)
