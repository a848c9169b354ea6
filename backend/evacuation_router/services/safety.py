"""
Fire proximity safety filter.

A start/destination pairing is unsafe when any fire detection lies within
the safety radius of either endpoint. Only the two endpoints are checked,
not the path between them.
"""

import logging
import math
from typing import Sequence

from schemas.common import Coordinate
from schemas.fire import FireDetection
from services.geo import haversine_m

logger = logging.getLogger(__name__)

DEFAULT_SAFETY_RADIUS_M = 5000.0


def is_safe(
    start: Coordinate,
    destination: Coordinate,
    fires: Sequence[FireDetection],
    safety_radius_meters: float = DEFAULT_SAFETY_RADIUS_M,
) -> bool:
    """True when no fire is within `safety_radius_meters` of either endpoint."""
    return not any(
        _threatens(start, fire, safety_radius_meters)
        or _threatens(destination, fire, safety_radius_meters)
        for fire in fires
    )


def _threatens(point: Coordinate, fire: FireDetection, radius_m: float) -> bool:
    if not (math.isfinite(fire.latitude) and math.isfinite(fire.longitude)):
        logger.debug(f"Ignoring fire with non-finite coordinates: {fire.latitude}, {fire.longitude}")
        return False
    d = haversine_m(point.lat, point.lng, fire.latitude, fire.longitude)
    return d < radius_m
