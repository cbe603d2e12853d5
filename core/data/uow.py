"""Unit of Work pattern for atomic transactions."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.repositories.order_repository import OrderRepository

from .repositories.memory_order_repository import InMemoryOrderRepository, InMemoryOrderStore
from .repositories.order_repository_impl import SqlAlchemyOrderRepository

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    Transaction scope shared by every order operation.

    Usage:
        async with uow:
            order = await uow.orders.find_by_id(order_id)
            ...
            await uow.commit()

    Leaving the block without commit() rolls back; leaving it with an
    exception rolls back and re-raises. Resources are always released.
    """

    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        """Order repository bound to this transaction."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit all pending changes."""

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback all pending changes."""

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            logger.debug(f"Rolling back after {exc_type.__name__}: {exc_val}")
        await self.rollback()


class UnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work over a SQLAlchemy async session.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Atomic commit/rollback of all repository operations
    3. Lazy initialization of repositories
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._order_repository = None
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback anything uncommitted, then release the connection."""
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self._session.close()
            self._session = None

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(self._session)
        return self._order_repository

    async def commit(self) -> None:
        """Commit all pending changes."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        await self._session.commit()
        logger.debug("Transaction committed")

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        await self._session.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """
    Unit of Work over the in-memory store.

    Each repository call is applied atomically and immediately; every
    service operation performs at most one write, so commit and rollback
    have nothing left to do.
    """

    def __init__(self, store: InMemoryOrderStore) -> None:
        self._orders = InMemoryOrderRepository(store)

    @property
    def orders(self) -> InMemoryOrderRepository:
        return self._orders

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
