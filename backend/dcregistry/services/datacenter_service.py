"""
Datacenter registry service: create, read, update, delete and search.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from dcregistry.core.errors import NotFound, StateConflict, VersionConflict
from dcregistry.database.databases.registry_db import Collections
from dcregistry.models.datacenter import (
    DataCenter,
    datacenter_to_document,
    document_to_datacenter,
)
from dcregistry.schemas.datacenter import DataCenterFilters
from dcregistry.services.query import (
    build_properties_query,
    build_query_filters,
    sanitize_search_query,
)
from dcregistry.services.validation import DataCenterInput, validate_datacenter

logger = logging.getLogger(__name__)


class DataCenterService:
    """Service for datacenter registry operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with the registry database."""
        self.db = db
        self.datacenters = db[Collections.DATACENTERS]

    # ==================== Queries ====================

    async def get_by_id(self, center_id: str) -> DataCenter:
        """Get a datacenter by centerId, raising NotFound if absent."""
        doc = await self._find_by_id(center_id)
        if doc is None:
            raise NotFound("No record found for this id")
        return document_to_datacenter(doc)

    async def get_many(self, filters: Optional[DataCenterFilters] = None) -> list[DataCenter]:
        """List datacenters matching every given field filter."""
        query = build_query_filters(filters)
        return await self._find_all(query)

    async def advanced_search(self, query: Optional[dict[str, Any]]) -> list[DataCenter]:
        """
        Search with a client-supplied structured query.

        The query is rebuilt from an allow-list of fields and operators
        before it reaches the database.
        """
        return await self._find_all(sanitize_search_query(query))

    async def search_by_properties(self, query: Optional[dict[str, Any]]) -> list[DataCenter]:
        """Find datacenters matching any of the given property constraints."""
        return await self._find_all(build_properties_query(query))

    # ==================== Mutations ====================

    async def create(self, record: DataCenterInput) -> DataCenter:
        """
        Register a new datacenter.

        Raises:
            InvalidArgument: If a required field is missing or properties are malformed
            StateConflict: If the centerId is already registered
        """
        dc = validate_datacenter(record)

        if await self._find_by_id(dc.center_id) is not None:
            logger.warning("Rejected create: centerId %s already exists", dc.center_id)
            raise StateConflict(f"A datacenter with centerId {dc.center_id} already exists")

        now = datetime.now(timezone.utc)
        doc = datacenter_to_document(dc, revision=0, created_at=now, updated_at=now)
        await self.datacenters.insert_one(doc)
        logger.info("Created datacenter %s", dc.center_id)

        return document_to_datacenter(doc)

    async def update(self, record: DataCenterInput) -> DataCenter:
        """
        Overwrite every mutable field of an existing datacenter.

        The replace is guarded by the stored revision; if another update
        landed in between, VersionConflict is raised and nothing is written.
        """
        dc = validate_datacenter(record)

        existing = await self._find_by_id(dc.center_id)
        if existing is None:
            logger.warning("Rejected update: centerId %s not found", dc.center_id)
            raise NotFound("No record found for this id")

        revision = existing.get("revision")
        guard = {
            "centerId": dc.center_id,
            # Documents written before revisions existed carry no marker
            "revision": revision if revision is not None else {"$exists": False},
        }
        doc = datacenter_to_document(
            dc,
            revision=(revision or 0) + 1,
            created_at=existing.get("createdAt"),
            updated_at=datetime.now(timezone.utc),
        )

        result = await self.datacenters.replace_one(guard, doc)
        if result.matched_count == 0:
            logger.warning("Rejected update: centerId %s changed concurrently", dc.center_id)
            raise VersionConflict(
                f"Datacenter {dc.center_id} was modified by another request"
            )
        logger.info("Updated datacenter %s (revision %d)", dc.center_id, doc["revision"])

        return document_to_datacenter(doc)

    async def delete(self, center_id: str) -> None:
        """Remove a datacenter, raising NotFound if absent."""
        if await self._find_by_id(center_id) is None:
            logger.warning("Rejected delete: centerId %s not found", center_id)
            raise NotFound("No record found for this id")

        await self.datacenters.delete_one({"centerId": center_id})
        logger.info("Deleted datacenter %s", center_id)

    # ==================== Helpers ====================

    async def _find_by_id(self, center_id: str) -> Optional[dict]:
        return await self.datacenters.find_one({"centerId": center_id})

    async def _find_all(self, query: dict[str, Any]) -> list[DataCenter]:
        cursor = self.datacenters.find(query)
        docs = await cursor.to_list(length=None)
        return [document_to_datacenter(d) for d in docs]
