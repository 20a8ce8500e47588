"""
Pydantic models for database documents and data structures.
"""
from dcregistry.models.datacenter import (
    DataCenter,
    PropertyValue,
    REQUIRED_FIELDS,
    document_to_datacenter,
    datacenter_to_document,
)

__all__ = [
    "DataCenter",
    "PropertyValue",
    "REQUIRED_FIELDS",
    "document_to_datacenter",
    "datacenter_to_document",
]
