import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

os.environ["ENV_STATE"] = "test"
from formsapi.database import database  # noqa: E402
from formsapi.main import app  # noqa: E402
from formsapi.rate_limit import limiter  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def db() -> AsyncGenerator:
    await database.connect()
    yield
    await database.disconnect()


@pytest.fixture()
async def async_client(db) -> AsyncGenerator:
    # every test starts with a fresh request budget
    limiter.reset()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def registration_schema() -> dict:
    return {
        "name": "user-registration",
        "description": "User registration form",
        "fields": [
            {"name": "firstName", "type": "text", "label": "First Name", "required": True, "minLength": 2},
            {"name": "email", "type": "email", "label": "Email Address", "required": True},
            {"name": "age", "type": "number", "label": "Age", "required": True, "min": 13, "max": 120},
            {
                "name": "gender",
                "type": "dropdown",
                "label": "Gender",
                "required": True,
                "options": ["Male", "Female", "Other"],
            },
            {
                "name": "phoneNumber",
                "type": "text",
                "label": "Phone Number",
                "validation": {"pattern": "^[+]?[1-9]?[0-9]{7,15}$", "message": "Please enter a valid phone number"},
            },
        ],
    }
