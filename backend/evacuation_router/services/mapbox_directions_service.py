"""
Mapbox Directions API Service

Requests ranked driving routes between two coordinates using the
Mapbox Directions v5 API with GeoJSON geometries.
"""

import logging
from typing import List, Optional, Dict, Any, Sequence

import httpx
from pydantic import ValidationError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config import get_settings, RouteExclusions, RouteProfiles
from schemas.common import Coordinate
from schemas.fire import FireDetection
from schemas.route import RouteCandidate, RouteOptions
from services.exceptions import RouteProviderUnavailable, describe_http_error
from services.geo import haversine_m

logger = logging.getLogger(__name__)
settings = get_settings()

# Mapbox codes that mean "no route" rather than a service failure
_NO_ROUTE_CODES = ("NoRoute", "NoSegment")


class MapboxDirectionsService:
    """Stateless client for Mapbox Directions API calls."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token if access_token is not None else settings.mapbox_access_token
        self.base_url = base_url or settings.mapbox_directions_url
        self.timeout = settings.external_api_timeout_seconds
        self.max_exclude_points = settings.mapbox_max_exclude_points
        self._transport = transport

    async def get_routes(
        self,
        start: Coordinate,
        end: Coordinate,
        options: Optional[RouteOptions] = None,
        fires: Sequence[FireDetection] = (),
    ) -> List[RouteCandidate]:
        """
        Get driving routes between two points, ranked by the provider.

        Returns an empty list when the provider finds no route. Missing
        credentials, transport errors and malformed responses raise
        RouteProviderUnavailable.
        """
        options = options or RouteOptions()
        profile = (
            RouteProfiles.DRIVING_TRAFFIC if options.exclude_high_traffic
            else settings.mapbox_profile
        )
        coords = f"{start.lng},{start.lat};{end.lng},{end.lat}"

        params: Dict[str, str] = {
            "geometries": "geojson",
            "overview": "full",
            "alternatives": "true" if options.alternatives else "false",
        }
        exclude = self._build_exclusions(start, end, options, fires)
        if exclude:
            params["exclude"] = ",".join(exclude)

        try:
            data = await self._make_request(f"{profile}/{coords}", params)
        except RouteProviderUnavailable:
            raise
        except httpx.HTTPError as e:
            reason = describe_http_error(e)
            logger.error(f"Mapbox directions request failed: {reason}")
            raise RouteProviderUnavailable(f"Directions request failed: {reason}") from e
        except ValueError as e:
            logger.error(f"Mapbox directions request failed: {e}")
            raise RouteProviderUnavailable(f"Directions request failed: {e}") from e

        if data.get("code") in _NO_ROUTE_CODES:
            logger.info(f"Mapbox found no route: {data.get('message', data.get('code'))}")
            return []

        try:
            return [self._parse_route(r) for r in data.get("routes") or []]
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            logger.error(f"Malformed Mapbox route payload: {e}")
            raise RouteProviderUnavailable("Directions provider returned a malformed route") from e

    def _build_exclusions(
        self,
        start: Coordinate,
        end: Coordinate,
        options: RouteOptions,
        fires: Sequence[FireDetection],
    ) -> List[str]:
        exclude: List[str] = []
        if options.exclude_ferries:
            exclude.append(RouteExclusions.FERRY)
        if options.prefer_highways is False:
            exclude.append(RouteExclusions.MOTORWAY)

        if options.exclude_fire_areas and fires:
            mid_lat = (start.lat + end.lat) / 2
            mid_lng = (start.lng + end.lng) / 2
            closest = sorted(
                fires,
                key=lambda f: haversine_m(mid_lat, mid_lng, f.latitude, f.longitude),
            )[: self.max_exclude_points]
            exclude.extend(f"point({f.longitude} {f.latitude})" for f in closest)

        return exclude

    @staticmethod
    def _parse_route(route: Dict[str, Any]) -> RouteCandidate:
        # GeoJSON positions are [lng, lat]
        points = [
            Coordinate(lat=pos[1], lng=pos[0])
            for pos in route["geometry"]["coordinates"]
        ]
        return RouteCandidate(
            geometry=points,
            duration_seconds=route["duration"],
            distance_meters=route["distance"],
        )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        reraise=True,
    )
    async def _make_request(self, endpoint: str, params: Dict[str, str]) -> Dict[str, Any]:
        """Make an authenticated GET request to the Mapbox Directions API."""
        if not self.access_token:
            raise RouteProviderUnavailable("Mapbox access token is not configured")

        params["access_token"] = self.access_token
        url = f"{self.base_url}/{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url, params=params)
            if response.status_code != 200 and _is_no_route(response):
                return response.json()
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError("Unexpected Mapbox response body")

        code = data.get("code", "")
        if code != "Ok" and code not in _NO_ROUTE_CODES:
            error_msg = data.get("message", code or "unknown error")
            logger.error(f"Mapbox API error: {error_msg}")
            raise ValueError(f"Mapbox API error: {error_msg}")

        return data


def _is_no_route(response: httpx.Response) -> bool:
    try:
        body = response.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("code") in _NO_ROUTE_CODES
