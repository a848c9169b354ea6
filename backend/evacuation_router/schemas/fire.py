"""
Schemas for active-fire detections (NASA FIRMS hotspots).
"""

from typing import Optional, List
from pydantic import Field

from .common import BaseSchema


class FireDetection(BaseSchema):
    """A single reported hotspot observation."""
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    confidence: str = "50"
    date: str
    brightness: Optional[float] = None
    scan: Optional[float] = None
    track: Optional[float] = None
    satellite: Optional[str] = None

    # Informational extras carried through from the provider
    acq_time: Optional[str] = None
    frp: Optional[float] = None
    daynight: Optional[str] = None


class FireFetchResult(BaseSchema):
    """
    Outcome of a fire-data query.

    `available` is False when the provider could not be reached or
    credentials are missing; `fires` is then empty and `error` says why.
    """
    fires: List[FireDetection] = Field(default_factory=list)
    available: bool = True
    error: Optional[str] = None
    source: Optional[str] = None
    rows_dropped: int = 0
