"""
Translation of registry filters and searches into MongoDB queries.
"""
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from dcregistry.core.errors import InvalidArgument
from dcregistry.models.datacenter import REQUIRED_FIELDS
from dcregistry.schemas.datacenter import DataCenterFilters

# Fields accepted by list filters, in document (camelCase) form.
FILTERABLE_FIELDS = ("country", "name", "type", "centerId")

SEARCHABLE_FIELDS = frozenset(REQUIRED_FIELDS)
LOGICAL_OPERATORS = frozenset({"$or", "$and", "$nor"})
VALUE_OPERATORS = frozenset({"$eq", "$ne", "$in", "$nin"})
LIST_OPERATORS = frozenset({"$in", "$nin"})


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (bool, int, float, str))


def _is_property_name(name: Any) -> bool:
    return isinstance(name, str) and bool(name) and "." not in name and not name.startswith("$")


# ==================== List Filters ====================


def build_query_filters(filters: Any) -> dict[str, Any]:
    """
    Build a conjunctive query from list-valued field filters.

    Each present, non-empty list becomes a ``$in`` constraint on its field.
    Absent or empty lists impose no constraint.
    """
    if filters is None:
        return {}
    if not isinstance(filters, DataCenterFilters):
        try:
            filters = DataCenterFilters.model_validate(dict(filters))
        except (TypeError, ValueError, ValidationError) as e:
            raise InvalidArgument("filters must map field names to lists of values") from e

    values = filters.model_dump(by_alias=True)
    query: dict[str, Any] = {}
    for field in FILTERABLE_FIELDS:
        accepted = values.get(field)
        if accepted:
            query[field] = {"$in": list(accepted)}
    return query


# ==================== Property Search ====================


def build_properties_query(query: Any) -> dict[str, Any]:
    """
    Build a disjunction over ``properties.<name>`` constraints.

    A scalar value is an equality match, a list is a membership match.
    """
    if query is None:
        raise InvalidArgument("body should be a valid properties query")
    if not isinstance(query, Mapping) or not query:
        raise InvalidArgument("properties query must name at least one property")

    clauses = []
    for name, accepted in query.items():
        if not _is_property_name(name):
            raise InvalidArgument(f"invalid property name: {name!r}")
        path = f"properties.{name}"
        if isinstance(accepted, list):
            if not accepted or not all(_is_scalar(v) for v in accepted):
                raise InvalidArgument(f"property {name} needs a non-empty list of scalar values")
            clauses.append({path: {"$in": list(accepted)}})
        elif _is_scalar(accepted):
            clauses.append({path: accepted})
        else:
            raise InvalidArgument(f"property {name} needs a scalar value or a list of them")
    return {"$or": clauses}


# ==================== Advanced Search ====================


def sanitize_search_query(query: Any) -> dict[str, Any]:
    """
    Rebuild a client-supplied search query from an allow-list.

    Only logical operators ($or, $and, $nor), record fields or
    ``properties.<name>`` paths, and $eq/$ne/$in/$nin conditions pass
    through. Anything else raises InvalidArgument.
    """
    if query is None:
        raise InvalidArgument("body should be a valid filter query")
    return _sanitize_clause(query)


def _sanitize_clause(clause: Any) -> dict[str, Any]:
    if not isinstance(clause, Mapping):
        raise InvalidArgument("body should be a valid filter query")

    sanitized: dict[str, Any] = {}
    for key, value in clause.items():
        if not isinstance(key, str):
            raise InvalidArgument("query keys must be strings")
        if key.startswith("$"):
            if key not in LOGICAL_OPERATORS:
                raise InvalidArgument(f"operator {key} is not allowed")
            if not isinstance(value, list) or not value:
                raise InvalidArgument(f"{key} requires a non-empty list of queries")
            sanitized[key] = [_sanitize_clause(sub) for sub in value]
        else:
            _check_searchable(key)
            sanitized[key] = _sanitize_condition(key, value)
    return sanitized


def _check_searchable(field: str) -> None:
    if field in SEARCHABLE_FIELDS:
        return
    prefix, _, name = field.partition(".")
    if prefix == "properties" and _is_property_name(name):
        return
    raise InvalidArgument(f"field {field} is not searchable")


def _sanitize_condition(field: str, condition: Any) -> Any:
    if _is_scalar(condition):
        return condition
    if isinstance(condition, list) and all(isinstance(v, str) for v in condition):
        return list(condition)
    if isinstance(condition, Mapping) and condition:
        sanitized = {}
        for op, operand in condition.items():
            if op not in VALUE_OPERATORS:
                raise InvalidArgument(f"operator {op} is not allowed on {field}")
            if op in LIST_OPERATORS:
                if not isinstance(operand, list) or not all(_is_scalar(v) for v in operand):
                    raise InvalidArgument(f"{op} on {field} requires a list of scalar values")
                sanitized[op] = list(operand)
            else:
                if not _is_scalar(operand):
                    raise InvalidArgument(f"{op} on {field} requires a scalar value")
                sanitized[op] = operand
        return sanitized
    raise InvalidArgument(f"unsupported condition on {field}")
