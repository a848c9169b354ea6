"""
Schemas for safe evacuation destinations.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Set

from pydantic import Field

from .common import BaseSchema, Coordinate


class DestinationKind(str, Enum):
    SHELTER = "shelter"
    HOSPITAL = "hospital"
    POLICE = "police"
    FIRE_STATION = "fire_station"


class ContactInfo(BaseSchema):
    phone: Optional[str] = None
    email: Optional[str] = None


class SafeDestination(BaseSchema):
    """
    A candidate evacuation endpoint.

    Only `location` drives routing decisions; `is_open` is surfaced as a
    route warning but does not exclude a destination.
    """
    id: str
    name: str
    location: Coordinate
    kind: DestinationKind = Field(..., alias="type")
    capacity: Optional[int] = Field(None, ge=0)
    contact: Optional[ContactInfo] = None
    facilities: Set[str] = Field(default_factory=set)
    is_open: bool
    last_updated: datetime
