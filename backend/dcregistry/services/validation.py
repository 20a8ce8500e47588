"""
Datacenter record validation.

Validation runs before any storage access: a record that fails here never
reaches the database.
"""
from collections.abc import Mapping
from typing import Any, Union

from pydantic import ValidationError

from dcregistry.core.errors import InvalidArgument
from dcregistry.models.datacenter import DataCenter, REQUIRED_FIELDS
from dcregistry.schemas.datacenter import DataCenterPayload

PROPERTIES_TYPE_MESSAGE = (
    "properties values must be one of: string, number, boolean, or array of strings"
)
PROPERTIES_KEY_MESSAGE = (
    "property names must be non-empty and must not contain '.' or start with '$'"
)

DataCenterInput = Union[DataCenterPayload, DataCenter, Mapping]


# Document (camelCase) name -> attribute (snake_case) name
_ATTRIBUTE_NAMES = {
    (info.alias or name): name for name, info in DataCenterPayload.model_fields.items()
}


def _as_fields(record: Any) -> Mapping:
    if record is None:
        raise InvalidArgument("datacenter is missing")
    if isinstance(record, (DataCenterPayload, DataCenter)):
        return record.model_dump(by_alias=True)
    if isinstance(record, Mapping):
        return record
    raise InvalidArgument("datacenter must be an object")


def _field_value(fields: Mapping, field: str) -> Any:
    if field in fields:
        return fields[field]
    return fields.get(_ATTRIBUTE_NAMES.get(field, field))


def to_payload(record: Any) -> DataCenterPayload:
    """Normalize caller input into a DataCenterPayload."""
    if isinstance(record, DataCenterPayload):
        return record
    try:
        return DataCenterPayload.model_validate(dict(_as_fields(record)))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise InvalidArgument(f"{field} is invalid: {first['msg']}") from e


def is_valid_property_value(value: Any) -> bool:
    """True for a bool, number, string, or list made only of strings."""
    if isinstance(value, (bool, str)):
        return True
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, list):
        return all(isinstance(item, str) for item in value)
    return False


def validate_properties(properties: Any) -> dict[str, Any]:
    """
    Check the shallow-type constraint on a properties mapping.

    Returns the properties (empty dict for None); raises InvalidArgument with
    one generic message for any value of the wrong shape.
    """
    if properties is None:
        return {}
    if not isinstance(properties, Mapping):
        raise InvalidArgument(PROPERTIES_TYPE_MESSAGE)

    for key, value in properties.items():
        if not isinstance(key, str) or not key or "." in key or key.startswith("$"):
            raise InvalidArgument(PROPERTIES_KEY_MESSAGE)
        if not is_valid_property_value(value):
            raise InvalidArgument(PROPERTIES_TYPE_MESSAGE)
    return dict(properties)


def validate_datacenter(record: Any) -> DataCenter:
    """
    Validate a create/update input and return the immutable record.

    Required fields are checked in a fixed order and the first missing,
    empty or falsy one is reported by name, before any field is type-checked.
    """
    raw = _as_fields(record)
    for field in REQUIRED_FIELDS:
        if not _field_value(raw, field):
            raise InvalidArgument(f"{field} is missing")

    fields = to_payload(raw).model_dump(by_alias=True)
    fields["properties"] = validate_properties(fields.get("properties"))
    return DataCenter.model_validate(fields)
