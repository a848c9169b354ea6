"""
Safe Destination Catalog API Routes
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException

from schemas.common import ErrorResponse
from schemas.destination import DestinationKind, SafeDestination
from safe_route.router import get_catalog_service
from services.catalog_service import DestinationCatalogService

router = APIRouter()


@router.get("", response_model=List[SafeDestination])
async def list_destinations(
    kind: Optional[DestinationKind] = None,
    open_only: bool = False,
    catalog: DestinationCatalogService = Depends(get_catalog_service),
):
    """List catalog destinations."""
    return catalog.list_destinations(kind=kind, open_only=open_only)


@router.get(
    "/{destination_id}",
    response_model=SafeDestination,
    responses={404: {"model": ErrorResponse}},
)
async def get_destination(
    destination_id: str,
    catalog: DestinationCatalogService = Depends(get_catalog_service),
):
    """Get a specific destination."""
    for dest in catalog.load():
        if dest.id == destination_id:
            return dest
    raise HTTPException(status_code=404, detail="Destination not found")
