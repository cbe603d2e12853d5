"""
Database configuration.

Engine and session factory creation, schema initialization and
connectivity checks.
"""
import logging

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.settings.sections.database import DatabaseSettings


logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Database settings

    Returns:
        Configured async engine
    """
    url = make_url(settings.database_url)
    logger.info(f"Creating database engine: {url.render_as_string(hide_password=True)}")

    if settings.is_sqlite_memory:
        # One shared connection, otherwise every session sees an empty database
        return create_async_engine(
            url,
            echo=settings.echo_sql,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if settings.is_sqlite:
        # File database: a connection per session, writers wait on the file lock
        return create_async_engine(
            url,
            echo=settings.echo_sql,
            connect_args={"timeout": settings.pool_timeout},
        )

    return create_async_engine(
        url,
        echo=settings.echo_sql,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
        pool_pre_ping=True,  # Test connections before using
    )


# =============================================================================
# SESSION FACTORY
# =============================================================================

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create session factory bound to `engine`.

    Returns:
        Session factory for creating sessions
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(engine: AsyncEngine) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    from core.data.models import Base

    logger.info("Initializing database schema...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database schema ready")


async def ping_database(engine: AsyncEngine) -> bool:
    """
    Check that a connection can be opened and used.

    Returns:
        True if `SELECT 1` succeeded
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database ping failed: {e}")
        return False


async def close_database(engine: AsyncEngine) -> None:
    """Close database connections."""
    logger.info("Closing database connections...")
    await engine.dispose()
    logger.info("✅ Database connections closed")
