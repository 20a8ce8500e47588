"""
Datacenter request schemas.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DataCenterPayload(BaseModel):
    """
    Create/update request body.

    Every field is optional at the schema level so that missing fields are
    reported by registry validation with a field-specific message.
    """
    model_config = ConfigDict(populate_by_name=True)

    center_id: Optional[str] = Field(None, alias="centerId")
    country: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    organization: Optional[str] = None
    storage_type: Optional[str] = Field(None, alias="storageType")
    contact_email: Optional[str] = Field(None, alias="contactEmail")
    song_url: Optional[str] = Field(None, alias="songUrl")
    score_url: Optional[str] = Field(None, alias="scoreUrl")
    properties: Optional[dict[str, Any]] = Field(
        None,
        description="String, number, boolean or list-of-string values",
    )


class DataCenterFilters(BaseModel):
    """Membership filters for listing datacenters (AND across fields)."""
    model_config = ConfigDict(populate_by_name=True)

    country: Optional[list[str]] = None
    name: Optional[list[str]] = None
    type: Optional[list[str]] = None
    center_id: Optional[list[str]] = Field(None, alias="centerId")

