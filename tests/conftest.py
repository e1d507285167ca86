"""
Inspection Data API — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── make_inspection_data: Factory for transient InspectionData records
    ├── inspection_service: AsyncMock standing in for InspectionDataService
    ├── make_token: Mints signed bearer tokens for a set of roles
    ├── auth_headers: Authorization header for a Role.User caller
    ├── app: Fresh FastAPI app with the service dependency overridden
    └── client: HTTPX AsyncClient talking to `app` over ASGI
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

# Must be set before anything imports inspection_api.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTH_ENABLED"] = "true"
os.environ["AUTH_JWT_SECRET"] = "test-secret-not-real"
os.environ["AUTH_JWT_ALGORITHM"] = "HS256"
os.environ["DEFAULT_PAGE_SIZE"] = "10"
os.environ["MAX_PAGE_SIZE"] = "100"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt

from inspection_api.models.inspection_data import InspectionData, WorkflowStatus
from inspection_api.security import Role
from inspection_api.services.inspection_data_base import InspectionDataService

TEST_JWT_SECRET = "test-secret-not-real"


@pytest.fixture
def make_inspection_data():
    """
    Factory for InspectionData records that are never persisted.

    Usage:
        record = make_inspection_data(inspection_id="insp-1", anonymized_uri=None)
    """
    counter = {"n": 0}

    def factory(**overrides) -> InspectionData:
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "id": f"id-{n}",
            "inspection_id": f"insp-{n}",
            "installation_code": "HUA",
            "raw_data_uri": f"https://raw.blob.core.windows.net/data/{n}.jpg",
            "anonymized_uri": f"https://anon.blob.core.windows.net/data/{n}.jpg",
            "anonymizer_workflow_status": WorkflowStatus.EXIT_SUCCESS.value,
            "date_created": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc) + timedelta(minutes=n),
        }
        fields.update(overrides)
        return InspectionData(**fields)

    return factory


@pytest.fixture
def inspection_service():
    """AsyncMock with the InspectionDataService interface; configure return values per test."""
    return AsyncMock(spec=InspectionDataService)


@pytest.fixture
def make_token():
    """Mints an HS256 token signed with the test secret."""

    def factory(roles=(Role.USER,), sub="test-user", expires_in=timedelta(hours=1), **claims) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": sub,
            "roles": list(roles),
            "iat": int(now.timestamp()),
            "exp": int((now + expires_in).timestamp()),
        }
        payload.update(claims)
        return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")

    return factory


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def app(inspection_service):
    from inspection_api.main import create_app
    from inspection_api.services.inspection_data_service import get_inspection_data_service

    application = create_app()
    application.dependency_overrides[get_inspection_data_service] = lambda: inspection_service
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight to the app (no server, no lifespan).

    Usage:
        async def test_x(client, auth_headers):
            response = await client.get("/InspectionData", headers=auth_headers)
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
