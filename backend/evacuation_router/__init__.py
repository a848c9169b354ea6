"""
Wildfire Evacuation Router

This service provides:
- Active fire detections from NASA FIRMS
- A catalog of safe evacuation destinations
- Nearest safe destination selection around known fires
- Drivable routes to that destination via Mapbox Directions
"""

__version__ = "1.0.0"
__author__ = "Evacuation Router Team"
