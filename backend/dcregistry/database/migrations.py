"""
Data migrations for the registry database.

Applied migrations are recorded in the _migrations changelog so each one
runs once. Usage:
    python -m dcregistry.database.migrations [up|status]
"""
import argparse
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from dcregistry.config import get_settings
from dcregistry.core.logging import configure_logging
from dcregistry.database.connections import MongoConnection
from dcregistry.database.databases.registry_db import Collections

logger = logging.getLogger(__name__)

MigrationStep = Callable[[AsyncIOMotorDatabase], Awaitable[int]]


@dataclass(frozen=True)
class Migration:
    """A named, ordered data migration."""
    migration_id: str
    description: str
    up: MigrationStep
    down: Optional[MigrationStep] = None  # None means irreversible


# ==================== Migrations ====================


async def split_url(db: AsyncIOMotorDatabase) -> int:
    """
    Split the legacy single ``url`` field into ``songUrl`` and ``scoreUrl``.

    Documents without a truthy ``url`` are left alone. Returns the number of
    documents modified.
    """
    collection = db[Collections.DATACENTERS]
    docs = await collection.find({"url": {"$exists": True}}).to_list(length=None)

    modified = 0
    for doc in docs:
        url = doc.get("url")
        if not url:
            continue
        result = await collection.update_one(
            {"_id": doc["_id"]},
            {
                "$set": {"songUrl": url, "scoreUrl": url},
                "$unset": {"url": 1},
            },
        )
        modified += result.modified_count
    return modified


MIGRATIONS: list[Migration] = [
    Migration(
        migration_id="20210805195658-scoreAndSongUrls",
        description="Split url into songUrl and scoreUrl",
        up=split_url,
    ),
]


# ==================== Runner ====================


async def applied_migration_ids(db: AsyncIOMotorDatabase) -> set[str]:
    """Ids of migrations already recorded in the changelog."""
    cursor = db[Collections.MIGRATIONS].find({}, {"migrationId": 1})
    docs = await cursor.to_list(length=None)
    return {doc["migrationId"] for doc in docs}


async def apply_migrations(
    db: AsyncIOMotorDatabase,
    migrations: Optional[list[Migration]] = None,
) -> list[str]:
    """
    Run pending migrations in order and record each in the changelog.

    Returns the ids applied by this call. A failing migration stops the run
    and is not recorded.
    """
    migrations = MIGRATIONS if migrations is None else migrations
    done = await applied_migration_ids(db)
    applied = []

    for migration in migrations:
        if migration.migration_id in done:
            logger.debug("Migration %s already applied", migration.migration_id)
            continue

        logger.info("Applying migration %s: %s", migration.migration_id, migration.description)
        modified = await migration.up(db)
        await db[Collections.MIGRATIONS].insert_one({
            "migrationId": migration.migration_id,
            "description": migration.description,
            "modifiedCount": modified,
            "appliedAt": datetime.now(timezone.utc),
        })
        logger.info("Migration %s modified %d documents", migration.migration_id, modified)
        applied.append(migration.migration_id)

    return applied


async def migration_status(
    db: AsyncIOMotorDatabase,
    migrations: Optional[list[Migration]] = None,
) -> list[dict]:
    """Applied/pending state of every known migration."""
    migrations = MIGRATIONS if migrations is None else migrations
    done = await applied_migration_ids(db)
    return [
        {
            "migration_id": m.migration_id,
            "description": m.description,
            "applied": m.migration_id in done,
            "reversible": m.down is not None,
        }
        for m in migrations
    ]


async def main(command: str) -> None:
    settings = get_settings()
    connection = MongoConnection.from_settings(settings)
    connection.open()
    try:
        if command == "status":
            for entry in await migration_status(connection.database):
                state = "applied" if entry["applied"] else "pending"
                logger.info("%s | %s | %s", entry["migration_id"], state, entry["description"])
        else:
            applied = await apply_migrations(connection.database)
            logger.info("Applied %d migration(s)", len(applied))
    finally:
        connection.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run registry data migrations")
    parser.add_argument("command", nargs="?", choices=["up", "status"], default="up")
    args = parser.parse_args()

    configure_logging(get_settings().log_level)
    asyncio.run(main(args.command))
