"""
Registry error types.

Every error is raised before (or instead of) a write and is surfaced to the
caller as-is. Driver errors are not wrapped.
"""


class RegistryError(Exception):
    """Base class for registry failures."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidArgument(RegistryError):
    """Input failed shape, required-field or type validation."""


class NotFound(RegistryError):
    """Referenced centerId does not exist."""


class StateConflict(RegistryError):
    """A record with the same centerId already exists."""


class VersionConflict(RegistryError):
    """The stored record changed since it was read (revision mismatch)."""
