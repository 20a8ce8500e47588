"""
Datacenters router for registry CRUD and search.
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from dcregistry.core.errors import (
    InvalidArgument,
    NotFound,
    RegistryError,
    StateConflict,
    VersionConflict,
)
from dcregistry.models.datacenter import DataCenter
from dcregistry.schemas.datacenter import DataCenterFilters
from dcregistry.services.datacenter_service import DataCenterService

router = APIRouter(prefix="/datacenters", tags=["Datacenters"])

_STATUS_BY_ERROR = {
    InvalidArgument: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    StateConflict: status.HTTP_409_CONFLICT,
    VersionConflict: status.HTTP_409_CONFLICT,
}


async def get_datacenter_service(request: Request) -> DataCenterService:
    """Dependency to get DataCenterService instance."""
    return DataCenterService(request.app.state.mongo.database)


def to_http_error(error: RegistryError) -> HTTPException:
    """Map a registry error to its HTTP status."""
    return HTTPException(
        status_code=_STATUS_BY_ERROR.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail=error.message,
    )


# ==================== Read Endpoints ====================


@router.get(
    "",
    response_model=list[DataCenter],
    summary="List datacenters",
)
async def list_datacenters(
    service: DataCenterService = Depends(get_datacenter_service),
    country: Optional[list[str]] = Query(None, description="Accepted countries"),
    name: Optional[list[str]] = Query(None, description="Accepted names"),
    type: Optional[list[str]] = Query(None, description="Accepted types"),
    center_id: Optional[list[str]] = Query(None, alias="centerId", description="Accepted centerIds"),
):
    """
    List datacenters, optionally filtered.

    Each filter may be repeated (`?country=CA&country=US`); a record must
    match every filter given.
    """
    filters = DataCenterFilters(
        country=country,
        name=name,
        type=type,
        centerId=center_id,
    )
    return await service.get_many(filters)


@router.get(
    "/{center_id}",
    response_model=DataCenter,
    summary="Get datacenter",
)
async def get_datacenter(
    center_id: str,
    service: DataCenterService = Depends(get_datacenter_service),
):
    """Get a datacenter by its centerId."""
    try:
        return await service.get_by_id(center_id)
    except RegistryError as e:
        raise to_http_error(e)


# ==================== Search Endpoints ====================


@router.post(
    "/search",
    response_model=list[DataCenter],
    summary="Advanced search",
)
async def advanced_search(
    query: Optional[dict[str, Any]] = Body(None),
    service: DataCenterService = Depends(get_datacenter_service),
):
    """
    Search with a structured query.

    Supports `$or`, `$and`, `$nor` and field conditions using `$eq`, `$ne`,
    `$in`, `$nin` on record fields or `properties.<name>`.
    """
    try:
        return await service.advanced_search(query)
    except RegistryError as e:
        raise to_http_error(e)


@router.post(
    "/search/properties",
    response_model=list[DataCenter],
    summary="Search by properties",
)
async def search_by_properties(
    query: Optional[dict[str, Any]] = Body(None),
    service: DataCenterService = Depends(get_datacenter_service),
):
    """
    Find datacenters matching any of the given properties.

    - **{"region": "east"}**: equality
    - **{"tier": [1, 2]}**: any of the listed values
    """
    try:
        return await service.search_by_properties(query)
    except RegistryError as e:
        raise to_http_error(e)


# ==================== Mutation Endpoints ====================


@router.post(
    "",
    response_model=DataCenter,
    status_code=status.HTTP_201_CREATED,
    summary="Register datacenter",
)
async def create_datacenter(
    body: Any = Body(None),
    service: DataCenterService = Depends(get_datacenter_service),
):
    """
    Register a new datacenter.

    All of **centerId**, **country**, **name**, **type**, **organization**,
    **storageType**, **songUrl**, **scoreUrl** and **contactEmail** are required.
    The body is checked by the registry, so malformed fields are reported as
    400 with the failing field named.
    """
    try:
        return await service.create(body)
    except RegistryError as e:
        raise to_http_error(e)


@router.put(
    "/{center_id}",
    response_model=DataCenter,
    summary="Update datacenter",
)
async def update_datacenter(
    center_id: str,
    body: Any = Body(None),
    service: DataCenterService = Depends(get_datacenter_service),
):
    """
    Replace every field of an existing datacenter.

    The body centerId may be omitted; if present it must match the path.
    """
    if isinstance(body, dict):
        body_id = body.get("centerId", body.get("center_id"))
        if body_id is not None and body_id != center_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="centerId in body does not match path",
            )
        body = {k: v for k, v in body.items() if k != "center_id"}
        body["centerId"] = center_id

    try:
        return await service.update(body)
    except RegistryError as e:
        raise to_http_error(e)


@router.delete(
    "/{center_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete datacenter",
)
async def delete_datacenter(
    center_id: str,
    service: DataCenterService = Depends(get_datacenter_service),
):
    """
    Delete a datacenter.

    **Warning**: This action cannot be undone.
    """
    try:
        await service.delete(center_id)
    except RegistryError as e:
        raise to_http_error(e)
