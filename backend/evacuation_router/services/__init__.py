"""
Services for the Wildfire Evacuation Router
"""

import logging

from .geo import distance, bounds_around
from .safety import is_safe
from .selector import find_nearest_safe_destination, select_nearest
from .mapbox_directions_service import MapboxDirectionsService
from .firms_service import FirmsFireDataService
from .catalog_service import DestinationCatalogService

# httpx logs every request URL at INFO, and provider URLs carry credentials
logging.getLogger("httpx").setLevel(logging.WARNING)

__all__ = [
    "distance",
    "bounds_around",
    "is_safe",
    "find_nearest_safe_destination",
    "select_nearest",
    "MapboxDirectionsService",
    "FirmsFireDataService",
    "DestinationCatalogService",
]
