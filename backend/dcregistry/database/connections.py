"""
Database connection management for MongoDB.
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from dcregistry.config import Settings

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Explicit MongoDB client handle.

    Opened once at startup and closed at shutdown; services receive the
    database it exposes rather than reaching for a global client.
    """

    def __init__(self, uri: str, db_name: str):
        self.uri = uri
        self.db_name = db_name
        self._client: Optional[AsyncIOMotorClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoConnection":
        return cls(settings.mongo_uri, settings.mongo_db_name)

    def open(self) -> AsyncIOMotorClient:
        """Create the client if it is not open yet."""
        if self._client is None:
            self._client = AsyncIOMotorClient(self.uri)
            logger.info("Opened MongoDB client for database %s", self.db_name)
        return self._client

    def close(self) -> None:
        """Close the client; safe to call more than once."""
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Closed MongoDB client")

    @property
    def is_open(self) -> bool:
        return self._client is not None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            raise RuntimeError("MongoDB connection is not open")
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """The registry database on the open client."""
        return self.client[self.db_name]

    async def ping(self) -> dict:
        return await self.client.admin.command("ping")
