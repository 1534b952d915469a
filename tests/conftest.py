"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_STORAGE_URI", "memory://")
os.environ.setdefault("DEFAULT_RATE_LIMIT", "10000/minute")
os.environ.setdefault("COMPLETION_RATE_LIMIT", "10000/minute")

import time  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.database import Base  # noqa: E402
from app.models.chat_session import ChatSession  # noqa: E402, F401
from app.providers.base import CompletionProvider, ProviderName  # noqa: E402
from app.providers.registry import ProviderRegistry  # noqa: E402

# --- Test DB (SQLite in-memory) ---

test_engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    """Create all tables before each test, drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a test database session."""
    async with test_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# --- Token helpers ---


def make_auth_headers(user_id: str = "user_1", expires_in: int = 300) -> dict[str, str]:
    """Generate Authorization headers with a token as the identity provider issues it."""
    token = jwt.encode(
        {"sub": user_id, "exp": int(time.time()) + expires_in},
        os.environ["JWT_SECRET_KEY"],
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


# --- Providers ---


class FakeProvider(CompletionProvider):
    """Provider double recording every window it receives."""

    def __init__(self, name: ProviderName, answer: str = "Test answer") -> None:
        self.name = name
        self.complete = AsyncMock(return_value=answer)  # type: ignore[method-assign]

    async def _complete(self, model: str, messages: list[dict[str, str]]) -> str:
        raise NotImplementedError


@pytest.fixture
def fake_providers() -> dict[ProviderName, FakeProvider]:
    """One fake per provider variant."""
    return {name: FakeProvider(name, answer=f"{name.value} answer") for name in ProviderName}


@pytest.fixture
def provider_registry(fake_providers: dict[ProviderName, FakeProvider]) -> ProviderRegistry:
    """Registry wired to the fake providers."""
    return ProviderRegistry(fake_providers)


# --- App override & client fixtures ---


def _get_app(provider_registry: ProviderRegistry | None = None):  # type: ignore[no-untyped-def]
    """Import app lazily and apply overrides."""
    from app.core.database import get_async_session as original_dep
    from app.dependencies import get_provider_registry
    from app.main import app

    app.dependency_overrides[original_dep] = override_get_async_session
    if provider_registry is not None:
        app.dependency_overrides[get_provider_registry] = lambda: provider_registry
    return app


@pytest.fixture
async def async_client(
    provider_registry: ProviderRegistry,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client without credentials."""
    application = _get_app(provider_registry)
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    application.dependency_overrides.clear()


@pytest.fixture
async def authed_client(
    provider_registry: ProviderRegistry,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client authenticated as ``user_1``."""
    application = _get_app(provider_registry)
    transport = ASGITransport(app=application)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=make_auth_headers()
    ) as ac:
        yield ac
    application.dependency_overrides.clear()


# --- DB session for tests ---


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a raw async session for repository tests."""
    async with test_session_factory() as session:
        yield session

