"""
Database module - MongoDB connection, registry database definition and migrations.
"""
from dcregistry.database.connections import MongoConnection
from dcregistry.database.databases import registry_db

__all__ = [
    "MongoConnection",
    "registry_db",
]
