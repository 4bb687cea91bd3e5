import pytest
from httpx import AsyncClient


async def submit(async_client: AsyncClient, data: dict):
    response = await async_client.post("/api/forms/submit", json={"data": data})
    assert response.status_code == 201


@pytest.mark.anyio
async def test_analytics_empty(async_client: AsyncClient):
    response = await async_client.get("/api/analytics")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Analytics data retrieved successfully"
    assert body["data"] == {
        "totalSubmissions": 0,
        "submissionsByGender": {},
        "submissionsByDate": {},
        "topFormFields": {},
    }


@pytest.mark.anyio
async def test_analytics_after_submissions(async_client: AsyncClient):
    await submit(async_client, {"gender": "Male", "age": 20})
    await submit(async_client, {"Gender": "Female", "Age": "40"})
    await submit(async_client, {"email": "a@b.co"})

    data = (await async_client.get("/api/analytics")).json()["data"]

    assert data["totalSubmissions"] == 3
    assert data["submissionsByGender"] == {"Female": 1, "Male": 1}
    assert data["averageAge"] == 30
    assert sum(data["submissionsByDate"].values()) == 3
    assert data["topFormFields"] == {"Age": 1, "Gender": 1, "age": 1, "email": 1, "gender": 1}


@pytest.mark.anyio
async def test_analytics_is_idempotent(async_client: AsyncClient):
    await submit(async_client, {"gender": "Other", "age": 33})

    first = await async_client.get("/api/analytics")
    second = await async_client.get("/api/analytics")

    assert first.content == second.content
