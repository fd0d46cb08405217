"""Pytest configuration for all tests."""

import os

os.environ.setdefault("RESUMEBUILDER_ENVIRONMENT", "testing")

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from resumebuilder.core.logging import get_logger
from resumebuilder.infrastructure.persistence.database import (
    DatabaseManager,
    set_db_manager,
)
from resumebuilder.infrastructure.services.email_service import (
    EmailService,
    get_email_service,
)

logger = get_logger(__name__)


@pytest_asyncio.fixture
async def db_manager() -> AsyncGenerator[DatabaseManager, None]:
    """Install a database manager backed by a fresh in-memory SQLite database.

    The manager becomes the global one, so the API, the authentication
    middleware and the tests all see the same data.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    manager = DatabaseManager(engine=engine)
    await manager.create_tables()
    set_db_manager(manager)

    yield manager

    await manager.drop_tables()
    await manager.disconnect()
    set_db_manager(None)


@pytest_asyncio.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with db_manager.session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def email_service() -> AsyncMock:
    """Email service double that records verification tokens instead of sending them."""
    service = AsyncMock(spec=EmailService)
    service.sent_tokens = []

    async def send_verification_email(to: str, name: str, token: str) -> None:
        service.sent_tokens.append(token)

    service.send_verification_email.side_effect = send_verification_email
    return service


@pytest_asyncio.fixture
async def client(
    db_manager: DatabaseManager, email_service: AsyncMock
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with the email service replaced."""
    from resumebuilder.infrastructure.api.app import app

    app.dependency_overrides[get_email_service] = lambda: email_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}
