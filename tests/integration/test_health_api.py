"""Health endpoint tests."""

import httpx
import pytest

from apps.api import deps, health


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/actuator/health", "/actuator/health/liveness"])
async def test_liveness(test_client: httpx.AsyncClient, path):
    response = await test_client.get(path)

    assert response.status_code == 200
    assert response.json() == {"status": "UP"}


@pytest.mark.asyncio
async def test_readiness_up(test_client: httpx.AsyncClient, test_engine, monkeypatch):
    monkeypatch.setattr(deps, "_engine", test_engine)

    response = await test_client.get("/actuator/health/readiness")

    assert response.status_code == 200
    assert response.json() == {"status": "UP", "components": {"db": "UP"}}


@pytest.mark.asyncio
async def test_readiness_down(test_client: httpx.AsyncClient, monkeypatch):
    async def unreachable(settings):
        return False

    monkeypatch.setattr(health, "check_storage_ready", unreachable)

    response = await test_client.get("/actuator/health/readiness")

    assert response.status_code == 503
    assert response.json()["status"] == "DOWN"


@pytest.mark.asyncio
async def test_readiness_with_memory_backend(test_client: httpx.AsyncClient, test_settings, monkeypatch):
    monkeypatch.setattr(test_settings.database, "storage_backend", "memory")

    response = await test_client.get("/actuator/health/readiness")

    assert response.status_code == 200
