"""
Safe-Route Pipeline

Finds the nearest evacuation destination clear of active fires and a
drivable route to it:
  catalog check -> fire proximity filter -> nearest selection -> directions
"""

from .router import router as safe_route_router

__all__ = ["safe_route_router"]
