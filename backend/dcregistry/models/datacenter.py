"""
Datacenter model for the registry database.
"""
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# A property value is shallow: no nested mappings, lists hold strings only.
PropertyValue = Union[bool, int, float, str, list[str]]

# Document field names, in the order they are validated.
REQUIRED_FIELDS = (
    "centerId",
    "country",
    "name",
    "type",
    "organization",
    "storageType",
    "songUrl",
    "scoreUrl",
    "contactEmail",
)


class DataCenter(BaseModel):
    """
    Datacenter record stored in the registry Datacenter collection.

    Records are immutable; an update builds a new record and replaces the
    stored document in one write. Writes always carry every field; fields
    may be None only when read back from documents of an older schema.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    center_id: str = Field(..., alias="centerId", description="Unique datacenter identifier")
    country: Optional[str] = Field(None, description="Country code")
    name: Optional[str] = Field(None, description="Display name")
    type: Optional[str] = Field(None, description="Datacenter type")
    organization: Optional[str] = Field(None, description="Owning organization")
    storage_type: Optional[str] = Field(None, alias="storageType", description="Storage backend type")
    contact_email: Optional[str] = Field(None, alias="contactEmail", description="Contact email")
    song_url: Optional[str] = Field(None, alias="songUrl", description="SONG service URL")
    score_url: Optional[str] = Field(None, alias="scoreUrl", description="SCORE service URL")
    properties: dict[str, PropertyValue] = Field(
        default_factory=dict,
        description="Free-form key/value properties",
    )


def datacenter_to_document(
    dc: DataCenter,
    revision: int = 0,
    created_at: Optional[datetime] = None,
    updated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """Build the MongoDB document for a record."""
    doc = dc.model_dump(by_alias=True)
    doc["revision"] = revision
    if created_at is not None:
        doc["createdAt"] = created_at
    if updated_at is not None:
        doc["updatedAt"] = updated_at
    return doc


def document_to_datacenter(doc: dict[str, Any]) -> DataCenter:
    """
    Strip storage bookkeeping from a document and return the record.

    Documents from older schema revisions are read as-is: a legacy ``url``
    stands in for ``songUrl``/``scoreUrl`` until the split-url migration
    runs, and fields the document never had come back as None.
    """
    legacy_url = doc.get("url")
    return DataCenter(
        centerId=doc["centerId"],
        country=doc.get("country"),
        name=doc.get("name"),
        type=doc.get("type"),
        organization=doc.get("organization"),
        storageType=doc.get("storageType"),
        contactEmail=doc.get("contactEmail"),
        songUrl=doc.get("songUrl") or legacy_url,
        scoreUrl=doc.get("scoreUrl") or legacy_url,
        properties=doc.get("properties") or {},
    )
