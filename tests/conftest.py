"""Shared test fixtures and configuration."""

import pytest
from typing import Generator, AsyncGenerator
import os

# Set TESTING flag to prevent loading .env file
os.environ['TESTING'] = '1'

# Set up test environment BEFORE any imports
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
os.environ['SECRET_KEY'] = 'test_secret_key_at_least_32_characters_long_for_security'
os.environ['DEBUG'] = 'true'

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from pet_registry.database import Base
from pet_registry.models import User, Pet
from pet_registry.middleware.rate_limiter import rate_limiter


TEST_DATABASE_URL = os.environ.get('TEST_DATABASE_URL', 'sqlite+aiosqlite:///:memory:')


class SessionUser:
    """Authenticated user seen by the test client; tests may switch it."""

    def __init__(self, user: User):
        self.user = user


@pytest.fixture(autouse=True)
def setup_test_env() -> Generator[None, None, None]:
    """Set up test environment variables before each test."""
    original_env = os.environ.copy()

    os.environ['TESTING'] = '1'
    os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///:memory:'
    os.environ['SECRET_KEY'] = 'test_secret_key_at_least_32_characters_long_for_security'

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> Generator[None, None, None]:
    """Start every test with empty auth rate limit counters."""
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment for tests that need to test missing variables."""
    original_env = os.environ.copy()

    os.environ.clear()
    os.environ['TESTING'] = '1'

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session for tests."""
    engine_kwargs = {"echo": False}
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so the in-memory database survives across sessions
        engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(TEST_DATABASE_URL, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


async def _create_user(session: AsyncSession, email: str, name: str) -> User:
    user = User(
        email=email,
        hashed_password="hashed_password_placeholder",
        name=name,
        is_active=True,
        is_superuser=False,
        is_verified=False
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(async_session: AsyncSession) -> User:
    """Create a test user."""
    return await _create_user(async_session, "test@example.com", "Test User")


@pytest.fixture
async def other_user(async_session: AsyncSession) -> User:
    """Create a second user that owns nothing of test_user's."""
    return await _create_user(async_session, "other@example.com", "Other User")


@pytest.fixture
async def test_pet(async_session: AsyncSession, test_user: User) -> Pet:
    """Create an active pet owned by test_user."""
    pet = Pet(
        user_id=test_user.id,
        name="Rex",
        description="Brown dog",
        nft_id="nft-rex",
        owner_name="Ana",
        owner_id="DNI123",
    )
    async_session.add(pet)
    await async_session.commit()
    return pet


@pytest.fixture
def session_user(test_user: User) -> SessionUser:
    """User returned by the overridden authentication dependency."""
    return SessionUser(test_user)


@pytest.fixture
async def async_client(async_session: AsyncSession, session_user: SessionUser):
    """Create test client with database session and auth overrides."""
    from httpx import AsyncClient, ASGITransport
    from pet_registry.main import app
    from pet_registry.database import get_async_session
    from pet_registry.dependencies import current_active_user

    async def override_get_async_session():
        yield async_session

    async def override_current_active_user():
        return session_user.user

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[current_active_user] = override_current_active_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def unauthenticated_client(async_session: AsyncSession):
    """Create test client with database session override but NO auth override.

    Use this for tests that need the full authentication flow
    (registration, login, bearer tokens).
    """
    from httpx import AsyncClient, ASGITransport
    from pet_registry.main import app
    from pet_registry.database import get_async_session

    async def override_get_async_session():
        yield async_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
