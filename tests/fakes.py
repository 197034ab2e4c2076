"""테스트용 인메모리 자격 증명 저장소.

In-memory CredentialStore used by the service tests.
Compare-and-set runs under an asyncio lock; reads yield to the event loop
so concurrent renewals really interleave.
"""

import asyncio
import uuid
from typing import Any
from uuid import UUID

from app.models.user import User
from app.utils.exceptions import UpstreamUnavailableError
from app.utils.password import verify_password


class InMemoryCredentialStore:
    """사용자 딕셔너리 기반 저장소 — dict-backed store with write accounting."""

    def __init__(self) -> None:
        self.users: dict[UUID, User] = {}
        self.writes: int = 0
        self.unavailable: bool = False
        self._lock = asyncio.Lock()

    def add_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(
            id=uuid.uuid4(),
            username=username,
            email=email,
            full_name=username.title(),
            password_hash=password_hash,
            refresh_token=None,
        )
        self.users[user.id] = user
        return user

    async def _io(self) -> None:
        await asyncio.sleep(0)
        if self.unavailable:
            raise UpstreamUnavailableError()

    async def find_by_identifier(self, identifier: str) -> User | None:
        await self._io()
        normalized = identifier.strip().lower()
        for user in self.users.values():
            if normalized in (user.username, user.email):
                return user
        return None

    async def get_by_id(self, principal_id: UUID) -> User | None:
        await self._io()
        return self.users.get(principal_id)

    async def verify_secret(self, principal: User, supplied_secret: str) -> bool:
        return verify_password(supplied_secret, principal.password_hash)

    async def get_refresh_token(self, principal_id: UUID) -> str | None:
        await self._io()
        user = self.users.get(principal_id)
        return user.refresh_token if user else None

    async def set_refresh_token(self, principal_id: UUID, value: str | None) -> bool:
        await self._io()
        async with self._lock:
            user = self.users.get(principal_id)
            if user is None:
                return False
            user.refresh_token = value
            self.writes += 1
            return True

    async def compare_and_set_refresh_token(
        self,
        principal_id: UUID,
        expected: str,
        new_value: str,
    ) -> bool:
        await self._io()
        async with self._lock:
            user = self.users.get(principal_id)
            if user is None or user.refresh_token != expected:
                return False
            user.refresh_token = new_value
            self.writes += 1
            return True

    async def username_or_email_taken(self, username: str, email: str) -> bool:
        await self._io()
        return any(u.username == username or u.email == email for u in self.users.values())

    async def create_user(self, data: dict[str, Any]) -> User:
        await self._io()
        user = User(id=uuid.uuid4(), refresh_token=None, **data)
        self.users[user.id] = user
        self.writes += 1
        return user
