"""Pytest configuration and fixtures for HTTP-level integration tests."""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from apps.api.deps import get_order_service, get_settings, reset_dependencies
from apps.api.main import create_app
from core.application.services.order_service import OrderApplicationService
from core.data.uow import create_uow
from core.settings import ApiSettings, AppSettings, AuthSettings, DatabaseSettings, OrderSettings

TEST_JWT_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"
TEST_ISSUER = "https://issuer.example.com/pool"
TEST_AUDIENCE = "orders-client"


def build_settings(auth: AuthSettings) -> AppSettings:
    return AppSettings(
        api=ApiSettings(prefix="", cors_origins=[]),
        auth=auth,
        database=DatabaseSettings(database_url="sqlite+aiosqlite:///:memory:", storage_backend="sql"),
        orders=OrderSettings(default_page_size=20, max_page_size=2000, cancel_max_attempts=2),
    )


@pytest.fixture
def test_settings() -> AppSettings:
    """Settings with authentication switched off."""
    return build_settings(AuthSettings(enabled=False))


@pytest.fixture
def secured_settings() -> AppSettings:
    """Settings validating HS256 tokens for a fixed issuer and audience."""
    return build_settings(
        AuthSettings(
            enabled=True,
            shared_secret=TEST_JWT_SECRET,
            issuer_uri=TEST_ISSUER,
            audience=TEST_AUDIENCE,
        )
    )


async def _client_for(settings: AppSettings, session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app(settings)

    def override_get_order_service():
        return OrderApplicationService(
            uow_factory=lambda: create_uow(session_factory),
            cancel_max_attempts=settings.orders.cancel_max_attempts,
        )

    app.dependency_overrides[get_order_service] = override_get_order_service
    app.dependency_overrides[get_settings] = lambda: settings

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()
    reset_dependencies()


@pytest_asyncio.fixture
async def test_client(test_settings, test_session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """API client without authentication, backed by the SQLite test database."""
    async for client in _client_for(test_settings, test_session_factory):
        yield client


@pytest_asyncio.fixture
async def secured_client(secured_settings, test_session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """API client that requires bearer tokens."""
    async for client in _client_for(secured_settings, test_session_factory):
        yield client
