"""사용자 레포지토리 — 사용자 조회 및 리프레시 토큰 저장.

User Repository — User lookups and refresh token persistence.
Extends BaseRepository with identifier lookups and the conditional
refresh-token update used for rotation. ``UserCredentialStore`` binds a
request session to the repository and implements the CredentialStore port.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import Select, or_, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository
from app.utils.exceptions import DuplicateError, UpstreamUnavailableError
from app.utils.password import verify_password


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def find_by_identifier(
        self,
        db: AsyncSession,
        identifier: str,
    ) -> User | None:
        """사용자명 또는 이메일로 사용자를 조회합니다.

        Retrieve a user whose username or email matches the identifier.
        Matching is case-insensitive because both columns are stored lower-case.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            identifier: 사용자명 또는 이메일 (Username or email)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        normalized: str = identifier.strip().lower()
        query: Select = select(User).where(
            or_(User.username == normalized, User.email == normalized)
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def get_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> str | None:
        """저장된 리프레시 토큰 값을 조회합니다.

        Read the stored refresh token value of a user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)

        Returns:
            str | None: 저장된 토큰 또는 None (Stored token, None when no session)
        """
        query: Select = select(User.refresh_token).where(User.id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def set_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        value: str | None,
    ) -> bool:
        """리프레시 토큰을 무조건 덮어씁니다.

        Overwrite the stored refresh token (None clears the session).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            value: 새 토큰 값 또는 None (New token value, or None)

        Returns:
            bool: 사용자 행이 존재하여 갱신되었는지 여부 (Whether the user row was updated)
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=value, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    async def compare_and_set_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        expected: str,
        new_value: str,
    ) -> bool:
        """저장값이 expected와 같을 때만 리프레시 토큰을 교체합니다.

        Replace the refresh token only if the stored value equals ``expected``.
        A single ``UPDATE ... WHERE refresh_token = :expected`` statement, so
        two concurrent rotations of the same token cannot both match.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            expected: 제시된 기존 토큰 (Presented, currently expected token)
            new_value: 새 토큰 (Replacement token)

        Returns:
            bool: 교체 성공 여부 (Whether exactly one row was updated)
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=new_value, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()


class UserCredentialStore:
    """요청 세션에 바인딩된 자격 증명 저장소 어댑터.

    CredentialStore adapter bound to one request session.
    Every write commits immediately so that tokens are only handed out
    after their persistence succeeded. Driver timeouts and connection
    failures are reported as UpstreamUnavailableError.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db: AsyncSession = db

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        try:
            yield
        except (OperationalError, InterfaceError, PoolTimeoutError, TimeoutError, OSError) as exc:
            # asyncpg의 연결 거부는 OSError 그대로 전파됨 — refused connects are not wrapped
            raise UpstreamUnavailableError() from exc
        except DBAPIError as exc:
            if exc.connection_invalidated:
                raise UpstreamUnavailableError() from exc
            raise

    async def find_by_identifier(self, identifier: str) -> User | None:
        async with self._guard():
            return await user_repository.find_by_identifier(self._db, identifier)

    async def get_by_id(self, principal_id: UUID) -> User | None:
        async with self._guard():
            return await user_repository.get_by_id(self._db, principal_id)

    async def verify_secret(self, principal: User, supplied_secret: str) -> bool:
        return verify_password(supplied_secret, principal.password_hash)

    async def get_refresh_token(self, principal_id: UUID) -> str | None:
        async with self._guard():
            return await user_repository.get_refresh_token(self._db, principal_id)

    async def set_refresh_token(self, principal_id: UUID, value: str | None) -> bool:
        async with self._guard():
            updated: bool = await user_repository.set_refresh_token(self._db, principal_id, value)
            await self._db.commit()
            return updated

    async def compare_and_set_refresh_token(
        self,
        principal_id: UUID,
        expected: str,
        new_value: str,
    ) -> bool:
        async with self._guard():
            swapped: bool = await user_repository.compare_and_set_refresh_token(
                self._db, principal_id, expected, new_value
            )
            await self._db.commit()
            return swapped

    async def username_or_email_taken(self, username: str, email: str) -> bool:
        async with self._guard():
            if await user_repository.exists(self._db, {"username": username}):
                return True
            return await user_repository.exists(self._db, {"email": email})

    async def create_user(self, data: dict[str, Any]) -> User:
        async with self._guard():
            try:
                user: User = await user_repository.create(self._db, data)
                await self._db.commit()
            except IntegrityError:
                # 동시 가입 경합 — concurrent registration won the unique constraint
                await self._db.rollback()
                raise DuplicateError("User with this email or username already exists")
            return user
