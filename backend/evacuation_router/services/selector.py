"""
Nearest safe destination selection.
"""

from typing import Optional, Sequence

from schemas.common import Coordinate
from schemas.destination import SafeDestination
from schemas.fire import FireDetection
from services.geo import distance
from services.safety import DEFAULT_SAFETY_RADIUS_M, is_safe


def find_nearest_safe_destination(
    start: Coordinate,
    destinations: Sequence[SafeDestination],
    fires: Sequence[FireDetection],
    safety_radius_meters: float = DEFAULT_SAFETY_RADIUS_M,
) -> Optional[SafeDestination]:
    """
    Closest destination whose pairing with `start` passes the fire
    proximity check, or None when there is none (including an empty
    catalog). Ties keep the first destination in input order.
    """
    best = None
    best_dist = float("inf")
    for dest in destinations:
        if not is_safe(start, dest.location, fires, safety_radius_meters):
            continue
        d = distance(start, dest.location)
        if d < best_dist:
            best_dist = d
            best = dest
    return best


select_nearest = find_nearest_safe_destination
