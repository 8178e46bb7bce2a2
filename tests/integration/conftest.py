"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database for the document and legacy stores
- Test client for the FastAPI app with the account store and credit
  score service replaced by fakes
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from bankflow.main import app
from bankflow.infrastructure.database import Base, get_db_session
from tests.conftest import FakeAccountStoreClient, FakeCreditScoreClient


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    account_client: FakeAccountStoreClient,
    credit_score_client: FakeCreditScoreClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with faked external systems.

    This client:
    - Uses an in-memory SQLite database shared across requests
    - Serves bills and accounts from the in-memory account store
    - Scores customers from a fixed table
    """
    async def override_get_db_session():
        yield test_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.state.account_client = account_client
    app.state.credit_score_client = credit_score_client
    app.state.migrated_users = set()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
