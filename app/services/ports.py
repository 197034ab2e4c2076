"""자격 증명 저장소 포트 — 세션 서비스가 의존하는 저장소 계약.

Credential store port — the persistence contract the session service depends on.
The SQLAlchemy adapter lives in ``app.repositories.user_repository``;
tests plug in an in-memory implementation.

Contract notes:
    - ``get_by_id`` (primary key) and ``find_by_identifier`` (username/email
      match) are distinct operations.
    - ``compare_and_set_refresh_token`` must be a single atomic conditional
      update, never a read followed by a write.
    - Any timeout or connectivity failure surfaces as
      ``UpstreamUnavailableError``.
"""

from typing import Any, Protocol
from uuid import UUID

from app.models.user import User


class CredentialStore(Protocol):
    """사용자 자격 증명 및 리프레시 토큰 저장소 인터페이스."""

    async def find_by_identifier(self, identifier: str) -> User | None:
        """사용자명 또는 이메일로 사용자를 조회합니다 (Match on username or email)."""
        ...

    async def get_by_id(self, principal_id: UUID) -> User | None:
        """기본 키로 사용자를 조회합니다 (Primary key lookup)."""
        ...

    async def verify_secret(self, principal: User, supplied_secret: str) -> bool:
        """비밀번호가 일치하는지 확인합니다 (Check the supplied secret)."""
        ...

    async def get_refresh_token(self, principal_id: UUID) -> str | None:
        """저장된 리프레시 토큰을 반환합니다 (Current stored value)."""
        ...

    async def set_refresh_token(self, principal_id: UUID, value: str | None) -> bool:
        """리프레시 토큰을 무조건 덮어씁니다 (Unconditional full overwrite).

        Returns False when no such principal exists.
        """
        ...

    async def compare_and_set_refresh_token(
        self,
        principal_id: UUID,
        expected: str,
        new_value: str,
    ) -> bool:
        """저장값이 expected일 때만 new_value로 교체합니다.

        Atomically replace the stored value only if it equals ``expected``.
        Returns True when the swap happened.
        """
        ...

    async def username_or_email_taken(self, username: str, email: str) -> bool:
        """사용자명 또는 이메일 중복 여부 (Whether either value is already used)."""
        ...

    async def create_user(self, data: dict[str, Any]) -> User:
        """새 사용자를 생성하고 커밋합니다 (Create and commit a user)."""
        ...
