"""FastAPI dependencies for dependency injection."""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.services.order_service import OrderApplicationService
from core.data.repositories.memory_order_repository import InMemoryOrderStore
from core.data.uow import InMemoryUnitOfWork, UnitOfWorkFactory, create_uow
from core.infrastructure.database.config import (
    close_database,
    create_engine,
    create_session_factory,
    init_database,
    ping_database,
)
from core.settings import AppSettings, get_app_settings

from apps.api.security import JwtBearerAuthenticator, Principal, UnauthorizedError

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
_memory_store: Optional[InMemoryOrderStore] = None
_authenticator: Optional[JwtBearerAuthenticator] = None

bearer_scheme = HTTPBearer(auto_error=False, description="JWT access token")


# =============================================================================
# STORAGE
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_engine(get_app_settings().database)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


def get_memory_store() -> InMemoryOrderStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryOrderStore()
        logger.info("Created InMemoryOrderStore instance")
    return _memory_store


def get_uow_factory(settings: AppSettings) -> UnitOfWorkFactory:
    """Unit of work factory for the configured storage backend."""
    if settings.database.storage_backend == "memory":
        store = get_memory_store()
        return lambda: InMemoryUnitOfWork(store)

    session_factory = get_session_factory()
    return lambda: create_uow(session_factory)


def get_order_service(settings: AppSettings = Depends(get_settings)) -> OrderApplicationService:
    """Get OrderApplicationService instance.

    Returns:
        OrderApplicationService instance
    """
    return OrderApplicationService(
        uow_factory=get_uow_factory(settings),
        cancel_max_attempts=settings.orders.cancel_max_attempts,
    )


async def init_storage(settings: AppSettings) -> None:
    """Create the schema on startup when the SQL backend asks for it."""
    if settings.database.storage_backend == "memory":
        logger.info("Using in-memory order storage")
        return
    if settings.database.create_schema:
        await init_database(get_engine())


async def check_storage_ready(settings: AppSettings) -> bool:
    if settings.database.storage_backend == "memory":
        return True
    return await ping_database(get_engine())


# =============================================================================
# AUTHENTICATION
# =============================================================================

def get_authenticator(settings: AppSettings) -> JwtBearerAuthenticator:
    global _authenticator
    if _authenticator is None or _authenticator.settings is not settings.auth:
        _authenticator = JwtBearerAuthenticator(settings.auth)
    return _authenticator


def require_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: AppSettings = Depends(get_settings),
) -> Optional[Principal]:
    """
    Reject requests without a valid bearer token.

    Declared sync so FastAPI runs it in the threadpool; a JWKS key fetch
    blocks on network I/O.
    """
    if not settings.auth.enabled:
        return None

    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    return get_authenticator(settings).authenticate(credentials.credentials)


# =============================================================================
# RESET (for testing)
# =============================================================================

async def shutdown_dependencies() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await close_database(_engine)
    _engine = None
    _session_factory = None


def reset_dependencies() -> None:
    global _engine, _session_factory, _memory_store, _authenticator

    _engine = None
    _session_factory = None
    _memory_store = None
    _authenticator = None

    logger.info("Dependencies reset")
