from datetime import datetime, timezone
from typing import List, Optional

import pytest

from schemas.common import Coordinate
from schemas.destination import DestinationKind, SafeDestination
from schemas.fire import FireDetection
from schemas.route import RouteCandidate


class StubDirections:
    """Directions provider double that records calls."""

    def __init__(self, candidates: Optional[List[RouteCandidate]] = None, error: Optional[Exception] = None):
        self.candidates = candidates or []
        self.error = error
        self.calls = []

    async def get_routes(self, start, end, options=None, fires=()):
        self.calls.append((start, end, options, list(fires)))
        if self.error:
            raise self.error
        return list(self.candidates)


def make_destination(dest_id: str, lat: float, lng: float, is_open: bool = True, **kwargs) -> SafeDestination:
    return SafeDestination(
        id=dest_id,
        name=kwargs.pop("name", dest_id),
        location=Coordinate(lat=lat, lng=lng),
        kind=kwargs.pop("kind", DestinationKind.SHELTER),
        is_open=is_open,
        last_updated=datetime(2025, 1, 8, tzinfo=timezone.utc),
        **kwargs,
    )


def make_fire(lat: float, lng: float, confidence: str = "80") -> FireDetection:
    return FireDetection(latitude=lat, longitude=lng, confidence=confidence, date="2025-01-08")


def make_candidate(start: Coordinate, end: Coordinate, duration: float = 600, distance: float = 3000) -> RouteCandidate:
    return RouteCandidate(geometry=[start, end], duration_seconds=duration, distance_meters=distance)


@pytest.fixture
def la_start():
    # Downtown Los Angeles
    return Coordinate(lat=34.05, lng=-118.24)


@pytest.fixture
def dodger_shelter():
    return make_destination("shelter-dodger", 34.0739, -118.2400, name="Dodger Stadium Emergency Shelter")


@pytest.fixture
def convention_shelter():
    return make_destination("shelter-convention", 34.0403, -118.2696, name="LA Convention Center Shelter")


@pytest.fixture
def la_shelters(dodger_shelter, convention_shelter):
    return [dodger_shelter, convention_shelter]


@pytest.fixture
def fire_at_dodger():
    return make_fire(34.0739, -118.2400)
