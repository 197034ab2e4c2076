"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Token settings are injected through the environment before the app is imported.
Each test gets a fresh schema on its own in-memory database.
"""

import os

# 앱 임포트 전에 필수 토큰 설정 주입 — required settings must exist before import
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret-0123456789abcdef")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret-0123456789abcdef")
os.environ.setdefault("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
os.environ.setdefault("REFRESH_TOKEN_EXPIRE_DAYS", "10")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import *  # noqa: F401,F403,E402 — register all models with metadata
from app.utils.jwt import TokenCodec  # noqa: E402
from app.utils.password import hash_password  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALICE_PASSWORD = "correct-pw"
# bcrypt는 느리므로 한 번만 해시 — hash once, bcrypt is slow
ALICE_PASSWORD_HASH = hash_password(ALICE_PASSWORD)


class FakeClock:
    """테스트용 조작 가능한 시계 — Settable UTC clock for token tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now: datetime = now or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def alice(db: AsyncSession):
    """비밀번호 "correct-pw"를 가진 Alice 사용자를 생성합니다."""
    from app.models.user import User
    user = User(
        username="alice",
        email="alice@example.com",
        full_name="Alice Liddell",
        password_hash=ALICE_PASSWORD_HASH,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec(clock: FakeClock) -> TokenCodec:
    """고정 시계를 사용하는 코덱 (access 15분, refresh 10일)."""
    return TokenCodec(
        access_secret="unit-access-secret-0123456789abcdef",
        refresh_secret="unit-refresh-secret-0123456789abcdef",
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=10),
        clock=clock,
    )


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def cookie_header(**cookies: str) -> dict[str, str]:
    return {"Cookie": "; ".join(f"{k}={v}" for k, v in cookies.items())}
