"""Shared pytest fixtures: in-memory SQLite engine, unit of work factories."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.application.services.order_service import OrderApplicationService
from core.data.models.base import Base
from core.data.repositories.memory_order_repository import InMemoryOrderStore
from core.data.uow import InMemoryUnitOfWork, create_uow


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    yield session_factory


@pytest_asyncio.fixture
async def test_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def memory_store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def sql_order_service(test_session_factory) -> OrderApplicationService:
    """Service backed by the SQLite test database."""
    return OrderApplicationService(uow_factory=lambda: create_uow(test_session_factory))


@pytest.fixture
def memory_order_service(memory_store) -> OrderApplicationService:
    """Service backed by the in-memory store."""
    return OrderApplicationService(uow_factory=lambda: InMemoryUnitOfWork(memory_store))
