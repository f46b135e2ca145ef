from __future__ import annotations

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "mycopath"


@pytest.mark.asyncio
async def test_request_id_is_generated(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/health")
    assert response.headers.get("x-request-id")


@pytest.mark.asyncio
async def test_request_id_is_echoed(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/health", headers={"X-Request-ID": "req-1234"})
    assert response.headers["x-request-id"] == "req-1234"


@pytest.mark.asyncio
async def test_validation_error_shape(client: AsyncClient) -> None:
    response = await client.post("/api/customers", json={})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert any(error["loc"][-1] == "name" for error in body["errors"])


@pytest.mark.asyncio
async def test_malformed_id_is_rejected(client: AsyncClient) -> None:
    response = await client.get("/api/production-batches/not-a-uuid")
    assert response.status_code == 400
