"""
Database registry management.
Ensures the registry database metadata and indexes exist on startup.
"""
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from dcregistry.database.databases import registry_db
from dcregistry.database.databases.registry_db import Collections


async def sync_registry(db: AsyncIOMotorDatabase) -> None:
    """
    Synchronize the database metadata document on application startup.
    """
    manifest = registry_db.build_manifest(db.name)
    now = datetime.now(timezone.utc)

    await db[Collections.METADATA].update_one(
        {"_id": "db_metadata"},
        {
            "$set": {
                **manifest,
                "last_updated_at": now,
            },
            "$setOnInsert": {
                "created_at": now,
            },
        },
        upsert=True,
    )


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create necessary indexes for the registry database."""
    await registry_db.create_registry_indexes(db)
