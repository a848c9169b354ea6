"""
Wildfire Evacuation Router

Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from config import get_settings
from api import api_router
from schemas.common import HealthCheckResponse

# Configure logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Wildfire Evacuation Router")
    logger.info(f"Environment: {settings.environment}")

    if not settings.mapbox_access_token:
        logger.warning("MAPBOX_ACCESS_TOKEN not set; route requests will report route_provider_unavailable")
    if not settings.firms_api_key:
        logger.warning("FIRMS_API_KEY not set; fire queries will report fire data unavailable")

    yield

    logger.info("Shutting down Wildfire Evacuation Router")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## Wildfire Evacuation Router

    Finds the nearest safe place a person near an active wildfire can reach,
    and a drivable route to it.

    ### Features

    * **Active Fires** - NASA FIRMS hotspot detections for a bounding box
    * **Safe Destinations** - Catalog of shelters, hospitals, police and fire stations
    * **Safe Route** - Nearest destination clear of fires, routed via Mapbox Directions

    ### Outcomes

    * **ok** - A route was found
    * **no_destinations_configured** - The destination catalog is empty
    * **no_safe_destination_found** - Every destination is too close to a fire
    * **route_provider_unavailable** - The directions provider failed or found no route
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code,
            "path": str(request.url.path)
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "status_code": 500,
            "path": str(request.url.path)
        }
    )


# Health check endpoint
@app.get("/health", tags=["Health"], response_model=HealthCheckResponse)
async def health_check() -> Dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


# Root endpoint
@app.get("/", tags=["Root"])
async def root() -> Dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "description": "Safe evacuation routing around active wildfires",
        "documentation": "/docs",
        "health_check": "/health",
        "api_prefix": settings.api_prefix,
        "providers": {
            "fire_data": "NASA FIRMS" if settings.firms_api_key else "unconfigured",
            "directions": "Mapbox" if settings.mapbox_access_token else "unconfigured",
        },
    }


# Include API router
app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
