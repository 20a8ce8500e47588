"""
Datacenter Registry Backend - FastAPI Application

CRUD registry for datacenter metadata records backed by MongoDB.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from dcregistry import __version__
from dcregistry.config import get_settings
from dcregistry.core.logging import configure_logging
from dcregistry.database.connections import MongoConnection
from dcregistry.database.registry import sync_registry, create_indexes
from dcregistry.routers import datacenters, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Open the MongoDB connection
    - Sync database metadata
    - Create indexes

    Shutdown:
    - Close the MongoDB connection
    """
    connection: MongoConnection = app.state.mongo
    logger.info("Starting up Datacenter Registry...")

    connection.open()
    try:
        await sync_registry(connection.database)
        await create_indexes(connection.database)
        logger.info("Database registry synced and indexes created")
    except PyMongoError as e:
        logger.warning("Database initialization warning: %s", e)

    yield

    logger.info("Shutting down Datacenter Registry...")
    connection.close()


def create_app(connection: Optional[MongoConnection] = None) -> FastAPI:
    """Build the FastAPI application around a MongoDB connection handle."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Datacenter Registry API",
        description="""
## Datacenter Registry API

Registry of datacenters: identity, geography, storage endpoints
(SONG and SCORE URLs) and free-form properties.

### Features
- **CRUD**: Register, read, replace and delete datacenters by `centerId`
- **Filtering**: List datacenters by country, name, type or centerId
- **Search**: Structured queries and property matching
        """,
        version=__version__,
        lifespan=lifespan,
    )
    app.state.mongo = connection or MongoConnection.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(datacenters.router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Datacenter Registry API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
