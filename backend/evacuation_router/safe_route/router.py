"""
Safe-Route API Router
"""

from fastapi import APIRouter, Depends, Response

from config import get_settings
from schemas.route import SafeRouteStatus
from services.catalog_service import DestinationCatalogService
from services.firms_service import FirmsFireDataService
from services.geo import bounds_around, distance
from .schemas import (
    SafeRouteRequest, SafeRouteResponse,
    NearestDestinationRequest, NearestDestinationResponse,
    DistanceRequest, DistanceResponse,
    EvacuationRequest, EvacuationResponse,
)
from .service import SafeRouteService

router = APIRouter()
settings = get_settings()

STATUS_CODES = {
    SafeRouteStatus.OK: 200,
    SafeRouteStatus.NO_DESTINATIONS_CONFIGURED: 422,
    SafeRouteStatus.NO_SAFE_DESTINATION_FOUND: 404,
    SafeRouteStatus.ROUTE_PROVIDER_UNAVAILABLE: 503,
    SafeRouteStatus.FIRE_DATA_UNAVAILABLE: 503,
}


def get_safe_route_service() -> SafeRouteService:
    return SafeRouteService()


def get_fire_service() -> FirmsFireDataService:
    return FirmsFireDataService()


def get_catalog_service() -> DestinationCatalogService:
    return DestinationCatalogService()


@router.post(
    "/route",
    response_model=SafeRouteResponse,
    summary="Find the nearest safe destination and a route to it",
)
async def find_safest_route(
    request: SafeRouteRequest,
    response: Response,
    service: SafeRouteService = Depends(get_safe_route_service),
):
    result = await service.find_safest_route(
        request.start, request.destinations, request.fires, request.options
    )
    response.status_code = STATUS_CODES[result.status]
    return result


@router.post(
    "/nearest",
    response_model=NearestDestinationResponse,
    summary="Select the nearest destination clear of known fires",
)
async def find_nearest_safe_destination(
    request: NearestDestinationRequest,
    service: SafeRouteService = Depends(get_safe_route_service),
):
    return service.nearest(
        request.start, request.destinations, request.fires, request.safety_radius_meters
    )


@router.post("/distance", response_model=DistanceResponse, summary="Great-circle distance")
async def great_circle_distance(request: DistanceRequest):
    return DistanceResponse(distance_meters=distance(request.a, request.b))


@router.post(
    "/evacuate",
    response_model=EvacuationResponse,
    summary="Route to safety using live fire data and the destination catalog",
    description=(
        "Fetches active fires around the requester, loads the configured "
        "destination catalog and runs the safe-route pipeline. If fire data "
        "is unavailable the route is computed with no known fires and the "
        "failure is reported under `fire_data`."
    ),
)
async def evacuate(
    request: EvacuationRequest,
    response: Response,
    service: SafeRouteService = Depends(get_safe_route_service),
    fire_service: FirmsFireDataService = Depends(get_fire_service),
    catalog: DestinationCatalogService = Depends(get_catalog_service),
):
    bounds = request.bounds or bounds_around(request.start, settings.fire_search_radius_meters)
    fire_data = await fire_service.get_active_fires(bounds)
    destinations = catalog.load()

    result = await service.find_safest_route(
        request.start, destinations, fire_data.fires, request.options
    )
    response.status_code = STATUS_CODES[result.status]
    return EvacuationResponse(result=result, fire_data=fire_data, bounds=bounds)
