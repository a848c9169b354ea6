"""
Schemas for driving routes returned by the directions provider.
"""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field

from .common import BaseSchema, Coordinate


class RouteOptions(BaseModel):
    """Routing options forwarded to the directions provider."""
    alternatives: bool = Field(default=True, description="Request alternative routes")
    exclude_ferries: bool = Field(default=True, description="Avoid ferry crossings")
    prefer_highways: Optional[bool] = Field(
        None, description="False excludes motorways; True or unset leaves them allowed"
    )
    exclude_high_traffic: Optional[bool] = Field(
        None, description="Use the traffic-aware driving profile"
    )
    exclude_fire_areas: Optional[bool] = Field(
        None, description="Ask the provider to route around fire detections"
    )


class RouteCandidate(BaseSchema):
    """One ranked path between two coordinates."""
    geometry: List[Coordinate] = Field(..., min_length=2)
    duration_seconds: float = Field(..., ge=0)
    distance_meters: float = Field(..., ge=0)


class RouteResult(RouteCandidate):
    """The provider's top-ranked route plus any alternatives it returned."""
    warnings: List[str] = Field(default_factory=list)
    alternatives: List[RouteCandidate] = Field(default_factory=list)

    @classmethod
    def from_candidates(
        cls, candidates: List[RouteCandidate], warnings: Optional[List[str]] = None
    ) -> "RouteResult":
        primary, *rest = candidates
        return cls(
            geometry=primary.geometry,
            duration_seconds=primary.duration_seconds,
            distance_meters=primary.distance_meters,
            warnings=list(warnings or []),
            alternatives=rest,
        )


class SafeRouteStatus(str, Enum):
    """Terminal outcome of a safe-route request."""
    OK = "ok"
    NO_DESTINATIONS_CONFIGURED = "no_destinations_configured"
    NO_SAFE_DESTINATION_FOUND = "no_safe_destination_found"
    ROUTE_PROVIDER_UNAVAILABLE = "route_provider_unavailable"
    FIRE_DATA_UNAVAILABLE = "fire_data_unavailable"
