"""
Database definitions and collection constants.
"""
from dcregistry.database.databases import registry_db

__all__ = ["registry_db"]
