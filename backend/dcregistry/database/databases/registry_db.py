"""
Registry database configuration.
Stores datacenter records and the migration changelog.

Structure:
- Datacenter: datacenter records, one document per centerId
- _migrations: applied data migrations
- _metadata: Database metadata
"""
from motor.motor_asyncio import AsyncIOMotorDatabase


class Collections:
    """Collection names in the registry database."""
    DATACENTERS = "Datacenter"    # Name kept from the historical data
    MIGRATIONS = "_migrations"
    METADATA = "_metadata"

    # Index definitions for each collection
    INDEXES = {
        "Datacenter": [
            {"keys": [("centerId", 1)], "unique": True},
            {"keys": [("country", 1)]},
            {"keys": [("name", 1)]},
            {"keys": [("type", 1)]},
        ],
        "_migrations": [
            {"keys": [("migrationId", 1)], "unique": True},
        ],
    }


async def create_registry_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create indexes for registry database collections."""
    for collection_name, indexes in Collections.INDEXES.items():
        collection = db[collection_name]
        for index_def in indexes:
            keys = index_def["keys"]
            kwargs = {k: v for k, v in index_def.items() if k != "keys"}
            await collection.create_index(keys, **kwargs)


def build_manifest(db_name: str) -> dict:
    """Manifest written to the database _metadata document."""
    return {
        "db_name": db_name,
        "purpose": "Datacenter metadata registry",
        "collections": [
            Collections.DATACENTERS,
            Collections.MIGRATIONS,
            Collections.METADATA,
        ],
        "schema_version": "2.0",  # songUrl/scoreUrl split
    }
