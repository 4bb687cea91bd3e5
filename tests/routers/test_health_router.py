import pytest
from httpx import AsyncClient


@pytest.mark.anyio
async def test_health(async_client: AsyncClient):
    response = await async_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["environment"] == "test"


@pytest.mark.anyio
async def test_unknown_route(async_client: AsyncClient):
    response = await async_client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Route not found",
        "error": "Cannot GET /api/nowhere",
    }
