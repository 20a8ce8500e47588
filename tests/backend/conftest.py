"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with backend-specific helpers
for testing FastAPI routes, services, and database operations.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))

TEST_DB_NAME = "datacenter_registry_test"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def indexed_registry_db(mock_registry_db):
    """Mock registry database with the application's indexes created."""
    from dcregistry.database.registry import create_indexes

    await create_indexes(mock_registry_db)
    yield mock_registry_db


@pytest.fixture
def mock_connection(mock_async_mongo_client):
    """
    MongoConnection handle backed by the mongomock-motor client.

    open() returns the mock client instead of dialing a server.
    """
    from dcregistry.database.connections import MongoConnection

    connection = MongoConnection("mongodb://test:27017", TEST_DB_NAME)
    connection._client = mock_async_mongo_client
    return connection


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def datacenter_service(indexed_registry_db):
    """DataCenterService on the indexed mock database."""
    from dcregistry.services.datacenter_service import DataCenterService

    return DataCenterService(indexed_registry_db)


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app_with_mocks(mock_connection):
    """FastAPI app wired to the mock MongoDB connection."""
    from dcregistry.main import create_app

    return create_app(connection=mock_connection)


@pytest.fixture
def client_with_mocks(app_with_mocks):
    """TestClient using the mocked app (runs the lifespan)."""
    from fastapi.testclient import TestClient

    with TestClient(app_with_mocks) as c:
        yield c


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
    return _assert
