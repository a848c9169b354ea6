"""
Pydantic schemas for the safe-route pipeline.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from schemas.common import BaseSchema, Bounds, Coordinate
from schemas.destination import SafeDestination
from schemas.fire import FireDetection, FireFetchResult
from schemas.route import RouteOptions, RouteResult, SafeRouteStatus


# ── Requests ─────────────────────────────────────────────────────────────

class SafeRouteRequest(BaseModel):
    """Find the nearest safe destination and a route to it."""
    start: Coordinate
    destinations: List[SafeDestination] = Field(default_factory=list)
    fires: List[FireDetection] = Field(default_factory=list)
    options: Optional[RouteOptions] = None


class NearestDestinationRequest(BaseModel):
    """Select the nearest safe destination without routing."""
    start: Coordinate
    destinations: List[SafeDestination] = Field(default_factory=list)
    fires: List[FireDetection] = Field(default_factory=list)
    safety_radius_meters: Optional[float] = Field(None, gt=0)


class DistanceRequest(BaseModel):
    a: Coordinate
    b: Coordinate


class EvacuationRequest(BaseModel):
    """
    Route from the requester's position using the configured catalog and
    live fire data.
    """
    start: Coordinate
    bounds: Optional[Bounds] = Field(
        None, description="Fire query window; defaults to a box around start"
    )
    options: Optional[RouteOptions] = None


# ── Responses ────────────────────────────────────────────────────────────

class SafeRouteResponse(BaseSchema):
    """Terminal outcome of one safe-route request."""
    request_id: str
    status: SafeRouteStatus
    message: str = ""
    destination: Optional[SafeDestination] = None
    distance_to_destination_meters: Optional[float] = None
    route: Optional[RouteResult] = None
    fires_considered: int = 0
    started_at: datetime
    completed_at: datetime

    @property
    def ok(self) -> bool:
        return self.status == SafeRouteStatus.OK


class NearestDestinationResponse(BaseSchema):
    status: SafeRouteStatus
    destination: Optional[SafeDestination] = None
    distance_meters: Optional[float] = None
    candidates_considered: int
    candidates_safe: int


class DistanceResponse(BaseSchema):
    distance_meters: float


class EvacuationResponse(BaseSchema):
    """Safe-route outcome plus the fire data it was computed from."""
    result: SafeRouteResponse
    fire_data: FireFetchResult
    bounds: Bounds
