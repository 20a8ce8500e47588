"""
Request and response schemas for API endpoints.
"""
from dcregistry.schemas.datacenter import (
    DataCenterPayload,
    DataCenterFilters,
)

__all__ = [
    "DataCenterPayload",
    "DataCenterFilters",
]
