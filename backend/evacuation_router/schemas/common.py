"""
Common schema definitions used across the service.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator


class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class Coordinate(BaseSchema):
    """Geographic position in decimal degrees. Immutable."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class Bounds(BaseSchema):
    """Bounding box in degrees, used to scope fire-data queries."""
    north: float = Field(..., ge=-90, le=90)
    south: float = Field(..., ge=-90, le=90)
    east: float = Field(..., ge=-180, le=180)
    west: float = Field(..., ge=-180, le=180)

    @model_validator(mode="after")
    def _check_order(self) -> "Bounds":
        if self.south > self.north:
            raise ValueError("south must not be greater than north")
        return self

    def as_area(self) -> str:
        """Render as the `west,south,east,north` string area APIs expect."""
        return f"{self.west},{self.south},{self.east},{self.north}"


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    status_code: int
    path: Optional[str] = None


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
    timestamp: datetime
