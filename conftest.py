import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time by the app module; point them at SQLite first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Optional local overrides for test runs
env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=False)

from libs.common.config import Settings, get_settings
from libs.db.base import Base
from libs.db.session import get_async_db
from services.store_service import models as _store_models  # noqa: F401
from services.store_service.app.main import create_app
from services.store_service.services.notifications import NotificationDispatcher

get_settings.cache_clear()

TEST_JWT_SECRET = "test-secret"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        ADMIN_JWT_SECRET=TEST_JWT_SECRET,
        RATE_LIMIT_ENABLED=False,
        STAFF_NOTIFICATION_EMAILS=["orders@test.com"],
        CONTACT_RECIPIENTS=["office@test.com"],
        SMTP_USERNAME=None,
        SMTP_PASSWORD=None,
        ORDER_NUMBER_PREFIX="ORD",
        DEFAULT_CURRENCY="RON",
    )


@pytest_asyncio.fixture
async def test_engine():
    """
    In-memory SQLite engine shared by every connection of one test.
    Tables are created fresh for each test and dropped with the engine.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False
    )
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def notifier():
    """Dispatcher double; background tasks call it after the response is built."""
    mock = MagicMock(spec=NotificationDispatcher)
    mock.send_order_confirmation = AsyncMock(return_value=True)
    mock.send_contact_message = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def app(test_settings, db_session, notifier):
    application = create_app(test_settings)
    application.dependency_overrides[get_async_db] = lambda: db_session
    application.state.notifier = notifier
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient bound to the store app with the DB dependency overridden.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


def make_token(role: str = "admin", sub: str = "admin-1") -> str:
    return jwt.encode(
        {"sub": sub, "email": f"{sub}@test.com", "role": role},
        TEST_JWT_SECRET,
        algorithm="HS256",
    )


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def member_headers() -> dict:
    return {"Authorization": f"Bearer {make_token(role='authenticated', sub='user-1')}"}
