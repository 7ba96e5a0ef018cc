"""
Service catalog endpoints for API v1.

CRUD over the ``services`` collection.  Every mutation returns the
affected service only; clients are expected to re-fetch the list
afterwards instead of patching their local copy.  Deleting requires
the admin role (see ``core.security``).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from service_dashboard_api.app.core.security import require_admin
from service_dashboard_api.app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from service_dashboard_api.app.services.catalog_service import CatalogService

router = APIRouter()


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(service: ServiceCreate) -> ServiceRead:
    """Add a service to the catalog.

    Title, details and price are required; ``available`` defaults to
    true.
    """
    return await CatalogService.create_service(service)


@router.get("/", response_model=List[ServiceRead])
async def list_services() -> List[ServiceRead]:
    """Return the full catalog."""
    return await CatalogService.list_services()


@router.get("/{service_id}", response_model=ServiceRead)
async def get_service(service_id: str) -> ServiceRead:
    try:
        return await CatalogService.get_service(service_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.put("/{service_id}", response_model=ServiceRead)
async def update_service(service_id: str, updates: ServiceUpdate) -> ServiceRead:
    """Replace the editable fields of a service."""
    try:
        return await CatalogService.update_service(service_id, updates)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.patch("/{service_id}/availability", response_model=ServiceRead)
async def toggle_availability(service_id: str) -> ServiceRead:
    """Mark an available service unavailable, or the other way round."""
    try:
        return await CatalogService.toggle_availability(service_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: str,
    role: str = Depends(require_admin()),
) -> None:
    """Delete a service (admin only)."""
    try:
        await CatalogService.delete_service(service_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return None
