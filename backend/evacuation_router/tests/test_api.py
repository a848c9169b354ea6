import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from safe_route.router import get_catalog_service, get_fire_service, get_safe_route_service
from safe_route.service import SafeRouteService
from schemas.common import Coordinate
from services.catalog_service import DestinationCatalogService
from services.firms_service import FirmsFireDataService

from conftest import StubDirections, make_candidate
from test_firms_service import CSV_BODY

PREFIX = "/api/v1"
START = {"lat": 34.05, "lng": -118.24}

DESTINATIONS = [
    {
        "id": "shelter-dodger",
        "name": "Dodger Stadium Emergency Shelter",
        "location": {"lat": 34.0739, "lng": -118.2400},
        "type": "shelter",
        "is_open": True,
        "last_updated": "2025-01-08T00:00:00Z",
    },
    {
        "id": "shelter-convention",
        "name": "LA Convention Center Shelter",
        "location": {"lat": 34.0403, "lng": -118.2696},
        "type": "shelter",
        "is_open": True,
        "last_updated": "2025-01-08T00:00:00Z",
    },
]

FIRE_AT_DODGER = {"latitude": 34.0739, "longitude": -118.24, "confidence": "80", "date": "2025-01-08"}


@pytest.fixture
def directions():
    start = Coordinate(**START)
    end = Coordinate(lat=34.0739, lng=-118.24)
    return StubDirections(candidates=[make_candidate(start, end, duration=420, distance=2900)])


@pytest.fixture
def client(directions):
    app.dependency_overrides[get_safe_route_service] = lambda: SafeRouteService(directions=directions)
    app.dependency_overrides[get_fire_service] = lambda: FirmsFireDataService(api_key="")
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_route_ok(client):
    response = client.post(f"{PREFIX}/safe-route/route", json={
        "start": START, "destinations": DESTINATIONS, "fires": [],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["destination"]["id"] == "shelter-dodger"
    assert body["destination"]["type"] == "shelter"
    assert body["route"]["duration_seconds"] == 420
    assert len(body["route"]["geometry"]) == 2


def test_route_empty_catalog(client):
    response = client.post(f"{PREFIX}/safe-route/route", json={"start": START, "destinations": []})

    assert response.status_code == 422
    assert response.json()["status"] == "no_destinations_configured"


def test_route_no_safe_destination(client):
    response = client.post(f"{PREFIX}/safe-route/route", json={
        "start": START, "destinations": DESTINATIONS, "fires": [FIRE_AT_DODGER],
    })

    assert response.status_code == 404
    assert response.json()["status"] == "no_safe_destination_found"


def test_route_provider_without_routes(client, directions):
    directions.candidates = []
    response = client.post(f"{PREFIX}/safe-route/route", json={
        "start": START, "destinations": DESTINATIONS,
    })

    assert response.status_code == 503
    assert response.json()["status"] == "route_provider_unavailable"


def test_route_rejects_invalid_coordinate(client):
    response = client.post(f"{PREFIX}/safe-route/route", json={
        "start": {"lat": 123.0, "lng": 0}, "destinations": DESTINATIONS,
    })
    assert response.status_code == 422


def test_nearest(client):
    response = client.post(f"{PREFIX}/safe-route/nearest", json={
        "start": START,
        "destinations": DESTINATIONS,
        "fires": [FIRE_AT_DODGER],
        "safety_radius_meters": 2000,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["destination"]["id"] == "shelter-convention"
    assert body["candidates_safe"] == 1


def test_distance(client):
    response = client.post(f"{PREFIX}/safe-route/distance", json={
        "a": START, "b": {"lat": 34.0739, "lng": -118.24},
    })

    assert response.status_code == 200
    assert response.json()["distance_meters"] == pytest.approx(2657.56, abs=1.0)


def test_evacuate_without_fire_data_still_routes(client):
    response = client.post(f"{PREFIX}/safe-route/evacuate", json={"start": START})

    assert response.status_code == 200
    body = response.json()
    assert body["result"]["status"] == "ok"
    assert body["result"]["destination"]["id"] == "shelter-dodger"
    assert body["fire_data"]["available"] is False
    assert body["bounds"]["south"] < START["lat"] < body["bounds"]["north"]


def test_evacuate_with_fire_near_start(client):
    fire_service = FirmsFireDataService(
        api_key="k", transport=httpx.MockTransport(lambda request: httpx.Response(200, text=CSV_BODY))
    )
    app.dependency_overrides[get_fire_service] = lambda: fire_service

    response = client.post(f"{PREFIX}/safe-route/evacuate", json={"start": START})

    assert response.status_code == 404
    body = response.json()
    assert body["result"]["status"] == "no_safe_destination_found"
    assert len(body["fire_data"]["fires"]) == 2


def test_fires_endpoint(client):
    fire_service = FirmsFireDataService(
        api_key="k", transport=httpx.MockTransport(lambda request: httpx.Response(200, text=CSV_BODY))
    )
    app.dependency_overrides[get_fire_service] = lambda: fire_service

    response = client.get(f"{PREFIX}/fires", params={
        "north": 34.5, "south": 33.5, "east": -117.8, "west": -118.8,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert len(body["fires"]) == 2


def test_fires_endpoint_rejects_inverted_bounds(client):
    response = client.get(f"{PREFIX}/fires", params={
        "north": 33.5, "south": 34.5, "east": -117.8, "west": -118.8,
    })
    assert response.status_code == 400


def test_destinations(client, tmp_path):
    response = client.get(f"{PREFIX}/destinations")
    assert response.status_code == 200
    assert [d["id"] for d in response.json()] == ["shelter-dodger", "shelter-convention"]

    app.dependency_overrides[get_catalog_service] = lambda: DestinationCatalogService(tmp_path / "empty.json")
    assert client.get(f"{PREFIX}/destinations").json() == []


def test_destination_by_id(client):
    assert client.get(f"{PREFIX}/destinations/shelter-convention").status_code == 200
    response = client.get(f"{PREFIX}/destinations/unknown")
    assert response.status_code == 404
    assert response.json()["error"] == "Destination not found"


def test_unhandled_error_uses_error_body():
    class BrokenCatalog:
        def load(self):
            raise RuntimeError("catalog storage offline")

    app.dependency_overrides[get_catalog_service] = lambda: BrokenCatalog()
    try:
        response = TestClient(app, raise_server_exceptions=False).get(f"{PREFIX}/destinations/anything")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {
        "error": "Internal server error",
        "status_code": 500,
        "path": f"{PREFIX}/destinations/anything",
    }
