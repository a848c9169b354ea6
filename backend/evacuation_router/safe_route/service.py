"""
Safe-Route Pipeline Service

Composes the end-to-end evacuation request:
  1. Check the destination catalog is not empty
  2. Select the nearest destination clear of known fires
  3. Request driving routes from the directions provider
  4. Return the provider's top-ranked route with its alternatives

Every failure is reported as a SafeRouteResponse status. Nothing is
retried here; transport retries belong to the provider client.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence

from config import get_settings
from schemas.common import Coordinate
from schemas.destination import SafeDestination
from schemas.fire import FireDetection
from schemas.route import RouteCandidate, RouteOptions, RouteResult, SafeRouteStatus
from services.exceptions import (
    SafeRouteError,
    NoDestinationsConfigured,
    NoSafeDestinationFound,
    RouteProviderUnavailable,
)
from services.geo import distance
from services.mapbox_directions_service import MapboxDirectionsService
from services.safety import is_safe
from services.selector import find_nearest_safe_destination

from .schemas import NearestDestinationResponse, SafeRouteResponse

logger = logging.getLogger(__name__)
settings = get_settings()

ENDPOINT_ONLY_WARNING = (
    "Fire proximity was checked at the start and destination only; "
    "the route itself may pass near active fires."
)


class RouteProvider(Protocol):
    async def get_routes(
        self,
        start: Coordinate,
        end: Coordinate,
        options: Optional[RouteOptions] = None,
        fires: Sequence[FireDetection] = (),
    ) -> List[RouteCandidate]:
        ...


class SafeRouteService:
    """Finds the nearest safe destination and a drivable route to it."""

    def __init__(
        self,
        directions: Optional[RouteProvider] = None,
        safety_radius_meters: Optional[float] = None,
    ):
        self.directions = directions if directions is not None else MapboxDirectionsService()
        self.safety_radius_meters = (
            safety_radius_meters if safety_radius_meters is not None
            else settings.safety_radius_meters
        )

    # ── public entry points ──────────────────────────────────────────

    async def find_safest_route(
        self,
        start: Coordinate,
        destinations: Sequence[SafeDestination],
        fires: Sequence[FireDetection],
        options: Optional[RouteOptions] = None,
    ) -> SafeRouteResponse:
        request_id = f"ROUTE-{uuid.uuid4().hex[:10].upper()}"
        started = datetime.now(timezone.utc)
        logger.info(
            f"[{request_id}] Safe route requested from ({start.lat}, {start.lng}), "
            f"{len(destinations)} destinations, {len(fires)} fires"
        )

        destination = None
        dest_distance = None
        try:
            destination = self._select_destination(request_id, start, destinations, fires)
            dest_distance = distance(start, destination.location)

            candidates = await self._request_routes(request_id, start, destination, fires, options)
            route = RouteResult.from_candidates(
                candidates, warnings=self._warnings(destination, fires)
            )
        except SafeRouteError as e:
            logger.warning(f"[{request_id}] {e.status.value}: {e.message}")
            return SafeRouteResponse(
                request_id=request_id,
                status=e.status,
                message=e.message,
                destination=destination,
                distance_to_destination_meters=dest_distance,
                fires_considered=len(fires),
                started_at=started,
                completed_at=datetime.now(timezone.utc),
            )

        logger.info(
            f"[{request_id}] Route to {destination.id}: "
            f"{route.distance_meters:.0f} m, {route.duration_seconds:.0f} s, "
            f"{len(route.alternatives)} alternatives"
        )
        return SafeRouteResponse(
            request_id=request_id,
            status=SafeRouteStatus.OK,
            message=f"Route to {destination.name}",
            destination=destination,
            distance_to_destination_meters=dest_distance,
            route=route,
            fires_considered=len(fires),
            started_at=started,
            completed_at=datetime.now(timezone.utc),
        )

    def nearest(
        self,
        start: Coordinate,
        destinations: Sequence[SafeDestination],
        fires: Sequence[FireDetection],
        safety_radius_meters: Optional[float] = None,
    ) -> NearestDestinationResponse:
        """Selector outcome with candidate counts, without routing."""
        radius = safety_radius_meters or self.safety_radius_meters
        safe_count = sum(
            1 for d in destinations if is_safe(start, d.location, fires, radius)
        )
        chosen = find_nearest_safe_destination(start, destinations, fires, radius)

        if not destinations:
            status = SafeRouteStatus.NO_DESTINATIONS_CONFIGURED
        elif chosen is None:
            status = SafeRouteStatus.NO_SAFE_DESTINATION_FOUND
        else:
            status = SafeRouteStatus.OK

        return NearestDestinationResponse(
            status=status,
            destination=chosen,
            distance_meters=distance(start, chosen.location) if chosen else None,
            candidates_considered=len(destinations),
            candidates_safe=safe_count,
        )

    # ── Steps ────────────────────────────────────────────────────────

    def _select_destination(
        self,
        request_id: str,
        start: Coordinate,
        destinations: Sequence[SafeDestination],
        fires: Sequence[FireDetection],
    ) -> SafeDestination:
        if not destinations:
            raise NoDestinationsConfigured("No safe destinations are configured")

        chosen = find_nearest_safe_destination(
            start, destinations, fires, self.safety_radius_meters
        )
        if chosen is None:
            raise NoSafeDestinationFound(
                f"None of {len(destinations)} destinations is clear of active fires "
                f"within {self.safety_radius_meters:.0f} m of it or the start point"
            )

        logger.info(f"[{request_id}] Selected {chosen.id} ({chosen.name})")
        return chosen

    async def _request_routes(
        self,
        request_id: str,
        start: Coordinate,
        destination: SafeDestination,
        fires: Sequence[FireDetection],
        options: Optional[RouteOptions],
    ) -> List[RouteCandidate]:
        if options is None:
            options = RouteOptions()
        try:
            candidates = await self.directions.get_routes(start, destination.location, options, fires)
        except RouteProviderUnavailable:
            raise
        except Exception as e:
            logger.exception(f"[{request_id}] Directions provider raised unexpectedly")
            raise RouteProviderUnavailable(f"Directions provider error: {type(e).__name__}") from e

        if not candidates:
            raise RouteProviderUnavailable(f"No route found to {destination.name}")
        return list(candidates)

    # ── Helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _warnings(destination: SafeDestination, fires: Sequence[FireDetection]) -> List[str]:
        warnings = []
        if not destination.is_open:
            warnings.append(
                f"{destination.name} is marked closed; confirm it is accepting "
                "evacuees before travelling."
            )
        if fires:
            warnings.append(ENDPOINT_ONLY_WARNING)
        return warnings
