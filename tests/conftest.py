"""
BidWriter Test Configuration and Fixtures
Shared pytest fixtures for all test modules.
"""
import os
import tempfile
from typing import AsyncGenerator, List, Optional
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bidwriter.database import create_engine_for_url
from bidwriter.models import Base
from bidwriter.schemas.funders import FunderScheme, RequiredSection
from bidwriter.services.funder_registry import FunderRegistry


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """Create an async SQLite engine for testing."""
    # Use a unique temp file for each test to ensure complete isolation
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    engine = create_engine_for_url(f"sqlite+aiosqlite:///{db_path}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()

    # Clean up the temp file
    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest.fixture(scope="function")
def session_maker(async_engine) -> async_sessionmaker:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def async_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create an async session for testing."""
    async with session_maker() as session:
        yield session
        await session.rollback()


# =============================================================================
# Funder Fixtures
# =============================================================================


@pytest.fixture
def funder_registry() -> FunderRegistry:
    """Registry over the bundled funder definitions."""
    return FunderRegistry()


@pytest.fixture
def make_scheme():
    """Factory for funder schemes with sensible defaults."""

    def _make_scheme(
        sections: Optional[List[RequiredSection]] = None,
        **kwargs,
    ) -> FunderScheme:
        return FunderScheme(
            name=kwargs.pop("name", "Test Scheme"),
            sections=sections or [],
            **kwargs,
        )

    return _make_scheme


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def mock_anthropic_client() -> MagicMock:
    """Anthropic client double whose message stream yields fixed chunks."""
    from tests.fakes import FakeMessageStream

    client = MagicMock()
    client.messages.stream = MagicMock(
        side_effect=lambda **kwargs: FakeMessageStream(["Hello", " world"])
    )
    return client


@pytest_asyncio.fixture
async def app_client(session_maker, mock_anthropic_client) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app with the test database and a mocked AI client."""
    from bidwriter.database import get_db
    from bidwriter.main import app
    from bidwriter.services.writing_assistant import WritingAssistantService, get_writing_assistant

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    assistant = WritingAssistantService(client=mock_anthropic_client)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_writing_assistant] = lambda: assistant

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
