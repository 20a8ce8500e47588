"""
Tests for registry data migrations.

These tests cover:
- The url -> songUrl/scoreUrl split
- Changelog bookkeeping (each migration runs once)
"""

import pytest
from unittest.mock import AsyncMock

from dcregistry.database.databases.registry_db import Collections
from dcregistry.database.migrations import (
    MIGRATIONS,
    Migration,
    apply_migrations,
    migration_status,
    split_url,
)


class TestSplitUrl:
    """Tests for the split-url migration."""

    @pytest.mark.asyncio
    async def test_url_copied_to_song_and_score_and_removed(
        self, mock_registry_db, legacy_datacenter_doc
    ):
        collection = mock_registry_db[Collections.DATACENTERS]
        await collection.insert_one(legacy_datacenter_doc)

        modified = await split_url(mock_registry_db)

        doc = await collection.find_one({"centerId": "legacy"})
        assert modified == 1
        assert doc["songUrl"] == "https://x"
        assert doc["scoreUrl"] == "https://x"
        assert "url" not in doc

    @pytest.mark.asyncio
    async def test_documents_without_url_untouched(self, mock_registry_db, datacenter_data):
        collection = mock_registry_db[Collections.DATACENTERS]
        await collection.insert_one(dict(datacenter_data))

        modified = await split_url(mock_registry_db)

        doc = await collection.find_one({"centerId": "collab"})
        assert modified == 0
        assert doc["songUrl"] == datacenter_data["songUrl"]
        assert doc["scoreUrl"] == datacenter_data["scoreUrl"]

    @pytest.mark.asyncio
    async def test_empty_url_left_alone(self, mock_registry_db, legacy_datacenter_doc):
        collection = mock_registry_db[Collections.DATACENTERS]
        await collection.insert_one({**legacy_datacenter_doc, "url": ""})

        await split_url(mock_registry_db)

        doc = await collection.find_one({"centerId": "legacy"})
        assert doc["url"] == ""
        assert "songUrl" not in doc

    @pytest.mark.asyncio
    async def test_migrated_document_readable_by_service(
        self, mock_registry_db, legacy_datacenter_doc
    ):
        from dcregistry.services.datacenter_service import DataCenterService

        await mock_registry_db[Collections.DATACENTERS].insert_one(legacy_datacenter_doc)
        await split_url(mock_registry_db)

        dc = await DataCenterService(mock_registry_db).get_by_id("legacy")

        assert dc.song_url == dc.score_url == "https://x"


class TestMigrationRunner:
    """Tests for apply_migrations and migration_status."""

    @pytest.mark.asyncio
    async def test_pending_migrations_applied_and_recorded(
        self, mock_registry_db, legacy_datacenter_doc
    ):
        await mock_registry_db[Collections.DATACENTERS].insert_one(legacy_datacenter_doc)

        applied = await apply_migrations(mock_registry_db)

        assert applied == [m.migration_id for m in MIGRATIONS]
        entry = await mock_registry_db[Collections.MIGRATIONS].find_one(
            {"migrationId": "20210805195658-scoreAndSongUrls"}
        )
        assert entry["modifiedCount"] == 1
        assert entry["appliedAt"] is not None

    @pytest.mark.asyncio
    async def test_second_run_applies_nothing(self, mock_registry_db):
        await apply_migrations(mock_registry_db)

        assert await apply_migrations(mock_registry_db) == []

    @pytest.mark.asyncio
    async def test_migrations_run_in_order(self, mock_registry_db):
        calls = []

        def step(name):
            async def _up(db):
                calls.append(name)
                return 0
            return _up

        migrations = [
            Migration("001-first", "first", step("first")),
            Migration("002-second", "second", step("second")),
        ]

        await apply_migrations(mock_registry_db, migrations)

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_failed_migration_not_recorded(self, mock_registry_db):
        failing = Migration("001-broken", "broken", AsyncMock(side_effect=RuntimeError("boom")))

        with pytest.raises(RuntimeError):
            await apply_migrations(mock_registry_db, [failing])

        assert await mock_registry_db[Collections.MIGRATIONS].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_status_reports_pending_then_applied(self, mock_registry_db):
        before = await migration_status(mock_registry_db)
        await apply_migrations(mock_registry_db)
        after = await migration_status(mock_registry_db)

        assert [e["applied"] for e in before] == [False] * len(MIGRATIONS)
        assert [e["applied"] for e in after] == [True] * len(MIGRATIONS)
        assert after[0]["reversible"] is False
