"""
Core module - Errors and logging setup.
"""
from dcregistry.core.errors import (
    RegistryError,
    InvalidArgument,
    NotFound,
    StateConflict,
    VersionConflict,
)
from dcregistry.core.logging import configure_logging

__all__ = [
    "RegistryError",
    "InvalidArgument",
    "NotFound",
    "StateConflict",
    "VersionConflict",
    "configure_logging",
]
