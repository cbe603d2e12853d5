"""
Health check endpoints.

Used by load balancer health checks; no authentication required.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.settings import AppSettings

from apps.api.deps import check_storage_ready, get_settings


router = APIRouter(prefix="/actuator/health", tags=["health"])


@router.get("")
@router.get("/liveness")
async def liveness_check():
    """
    Liveness check endpoint.

    The process is up and serving requests.
    """
    return {"status": "UP"}


@router.get("/readiness")
async def readiness_check(settings: AppSettings = Depends(get_settings)):
    """
    Readiness check endpoint.

    Returns 503 while the order store is unreachable.
    """
    if await check_storage_ready(settings):
        return {"status": "UP", "components": {"db": "UP"}}

    return JSONResponse(
        status_code=503,
        content={"status": "DOWN", "components": {"db": "DOWN"}},
    )
