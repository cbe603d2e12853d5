"""
Order Management API - FastAPI application entry point.

Create, fetch, cancel and list orders behind JWT bearer authentication.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from core.infrastructure.logging import configure_logging
from core.settings import AppSettings, get_app_settings

from apps.api import health
from apps.api.deps import get_authenticator, init_storage, shutdown_dependencies
from apps.api.errors import register_exception_handlers
from apps.api.v1.endpoints import orders

logger = logging.getLogger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to wire; defaults to the cached global settings

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_app_settings()
    configure_logging(settings.api.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Order Management API starting up...")
        await init_storage(settings)
        if settings.auth.enabled:
            # Fail fast on incomplete auth configuration
            get_authenticator(settings)
        else:
            logger.warning("Authentication is DISABLED (AUTH_ENABLED=false)")
        yield
        logger.info("👋 Order Management API shutting down...")
        await shutdown_dependencies()

    app = FastAPI(
        title=settings.api.title,
        description="Create, fetch, cancel and list orders.",
        version=settings.api.version,
        lifespan=lifespan,
    )

    # =========================================================================
    # CORS MIDDLEWARE
    # =========================================================================

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Location"],
        )

    # =========================================================================
    # REQUEST LOGGING MIDDLEWARE
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests with timing."""
        start_time = time.time()

        logger.info(f"→ {request.method} {request.url.path}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            f"← {request.method} {request.url.path} "
            f"[{response.status_code}] ({duration:.3f}s)"
        )

        return response

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(orders.router, prefix=settings.api.prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    api_settings = get_app_settings().api
    uvicorn.run(app, host=api_settings.host, port=api_settings.port)
