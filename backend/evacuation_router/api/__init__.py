"""
API Routes for the Wildfire Evacuation Router
"""

from fastapi import APIRouter

from .fires import router as fires_router
from .destinations import router as destinations_router
from safe_route import safe_route_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(
    fires_router,
    prefix="/fires",
    tags=["Active Fires"]
)

api_router.include_router(
    destinations_router,
    prefix="/destinations",
    tags=["Safe Destinations"]
)

api_router.include_router(
    safe_route_router,
    prefix="/safe-route",
    tags=["Safe Route"]
)

__all__ = ["api_router"]
