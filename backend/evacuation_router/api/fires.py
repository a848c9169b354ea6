"""
Active Fire API Routes
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from schemas.common import Bounds
from schemas.fire import FireFetchResult
from safe_route.router import get_fire_service
from services.firms_service import FirmsFireDataService

router = APIRouter()


@router.get("", response_model=FireFetchResult)
async def list_active_fires(
    north: float = Query(..., ge=-90, le=90),
    south: float = Query(..., ge=-90, le=90),
    east: float = Query(..., ge=-180, le=180),
    west: float = Query(..., ge=-180, le=180),
    service: FirmsFireDataService = Depends(get_fire_service),
):
    """Active fire detections inside a bounding box."""
    try:
        bounds = Bounds(north=north, south=south, east=east, west=west)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e.errors()[0]["msg"]))
    return await service.get_active_fires(bounds)
