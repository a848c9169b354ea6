"""
Failure taxonomy for safe-route requests.
"""

import httpx

from schemas.route import SafeRouteStatus


class SafeRouteError(Exception):
    """Base class; `status` is the outcome code reported to callers."""
    status: SafeRouteStatus

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NoDestinationsConfigured(SafeRouteError):
    status = SafeRouteStatus.NO_DESTINATIONS_CONFIGURED


class NoSafeDestinationFound(SafeRouteError):
    status = SafeRouteStatus.NO_SAFE_DESTINATION_FOUND


class RouteProviderUnavailable(SafeRouteError):
    status = SafeRouteStatus.ROUTE_PROVIDER_UNAVAILABLE


class FireDataUnavailable(SafeRouteError):
    status = SafeRouteStatus.FIRE_DATA_UNAVAILABLE


def describe_http_error(error: Exception) -> str:
    """
    Short reason for a failed provider request.

    httpx error text embeds the request URL, which carries the provider
    credential, so only the status code or the error type is reported.
    """
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    return type(error).__name__
