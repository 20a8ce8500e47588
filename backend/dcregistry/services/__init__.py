"""
Service layer for business logic.
"""
from dcregistry.services.datacenter_service import DataCenterService

__all__ = [
    "DataCenterService",
]
