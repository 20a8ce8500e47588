"""
Global test fixtures for the Datacenter Registry.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Datacenter record factories
"""

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

TEST_DB_NAME = "datacenter_registry_test"


@pytest.fixture
def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    from mongomock_motor import AsyncMongoMockClient

    client = AsyncMongoMockClient()
    yield client
    client.close()


@pytest.fixture
def mock_registry_db(mock_async_mongo_client):
    """Provide the mock registry database (no indexes yet)."""
    return mock_async_mongo_client[TEST_DB_NAME]


# =============================================================================
# Datacenter Fixtures
# =============================================================================

@pytest.fixture
def datacenter_data() -> dict:
    """A complete, valid datacenter as sent by clients."""
    return {
        "centerId": "collab",
        "country": "CA",
        "name": "Collaboratory Toronto",
        "type": "RDPC",
        "organization": "OICR",
        "storageType": "S3",
        "contactEmail": "collab@example.org",
        "songUrl": "https://song.collab.example.org",
        "scoreUrl": "https://score.collab.example.org",
        "properties": {
            "region": "east",
            "tier": 1,
            "public": True,
            "tags": ["genomics", "cancer"],
        },
    }


@pytest.fixture
def make_datacenter(datacenter_data) -> Callable[..., dict]:
    """
    Factory for datacenter dicts with overrides.

    Usage:
        def test_something(make_datacenter):
            dc = make_datacenter(centerId="aws-ca", country="US")
    """
    def _make(**overrides: Any) -> dict:
        data = {**datacenter_data, "properties": dict(datacenter_data["properties"])}
        data.update(overrides)
        return data
    return _make


@pytest.fixture
def legacy_datacenter_doc() -> dict:
    """A document written before the songUrl/scoreUrl split."""
    return {
        "centerId": "legacy",
        "country": "UK",
        "name": "Legacy Center",
        "type": "RDPC",
        "organization": "EBI",
        "storageType": "S3",
        "contactEmail": "legacy@example.org",
        "url": "https://x",
    }
