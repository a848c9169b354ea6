"""
Wildfire Evacuation Router
Configuration Settings
"""

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
from functools import lru_cache

DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Wildfire Evacuation Router"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # API
    api_prefix: str = "/api/v1"
    api_host: str = "0.0.0.0"
    api_port: int = 8030

    # External APIs
    firms_api_key: Optional[str] = None
    firms_api_url: str = "https://firms.modaps.eosdis.nasa.gov/api/area/csv"
    firms_source: str = "VIIRS_SNPP_NRT"  # VIIRS for higher resolution
    firms_day_range: int = Field(default=1, ge=1, le=10)

    mapbox_access_token: Optional[str] = None
    mapbox_directions_url: str = "https://api.mapbox.com/directions/v5"
    mapbox_profile: str = "mapbox/driving"
    mapbox_max_exclude_points: int = 50

    external_api_timeout_seconds: int = 30

    # Safety policy
    safety_radius_meters: float = 5000.0
    fire_search_radius_meters: float = 50000.0

    # Fire data defaults for fields the provider leaves blank
    default_fire_confidence: str = "50"
    default_fire_brightness: float = 350.0

    # Destination catalog
    destination_catalog_path: str = Field(
        default=str(DATA_DIR / "safe_destinations.json"),
        description="JSON file holding the safe destination catalog"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


class RouteExclusions:
    """Mapbox `exclude` values."""
    FERRY = "ferry"
    MOTORWAY = "motorway"
    TOLL = "toll"


class RouteProfiles:
    """Mapbox routing profiles."""
    DRIVING = "mapbox/driving"
    DRIVING_TRAFFIC = "mapbox/driving-traffic"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
