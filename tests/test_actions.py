from fastapi.testclient import TestClient
import pytest

from apps.analysis_server.main import app
from src.overlays import OverlayFetchFailed, OverlayKind


SITES = [
    {
        "id": "site-1",
        "name": "Pura Meru",
        "localName": "Pura Meru Cakranegara",
        "categoryName": "Temple",
        "categoryColor": "#ef4444",
        "latitude": -8.650,
        "longitude": 116.300,
        "significanceScore": 9.0,
        "preservationStatus": "good",
    },
    {
        "id": "site-2",
        "name": "Taman Mayura",
        "latitude": -8.651,
        "longitude": 116.301,
        "significanceScore": 8.0,
    },
    {
        "id": "site-3",
        "name": "Desa Sade",
        "latitude": -8.800,
        "longitude": 116.500,
    },
    {"id": "site-4", "name": "Unmapped Archive", "latitude": None, "longitude": None},
]


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_distance_action(client: TestClient):
    payload = {"pointA": {"lat": 0, "lng": 0}, "pointB": {"lat": 0, "lng": 1}}

    response = client.post("/actions/distance", json=payload)
    assert response.status_code == 200
    assert response.json()["distanceM"] == pytest.approx(111_195, rel=0.01)


def test_buffer_zones_use_profile_radius(client: TestClient):
    response = client.post("/actions/buffer_zones", json={"sites": SITES})
    assert response.status_code == 200

    zones = response.json()["zones"]
    assert [z["siteId"] for z in zones] == ["site-1", "site-2", "site-3"]
    assert all(z["radius"] == 500 for z in zones)
    assert zones[0]["color"] == "#ef4444"
    assert zones[1]["color"] == "#3b82f6"
    assert zones[0]["center"] == {"lat": -8.650, "lng": 116.300}


def test_buffer_zones_radius_from_env_profile(client: TestClient, monkeypatch):
    monkeypatch.setenv("ANALYSIS_PROFILE", "lombok-rural")

    zones = client.post("/actions/buffer_zones", json={"sites": SITES}).json()["zones"]
    assert all(z["radius"] == 1000 for z in zones)


def test_buffer_zones_explicit_radius(client: TestClient):
    response = client.post("/actions/buffer_zones", json={"sites": SITES, "radiusM": 250})
    assert all(z["radius"] == 250 for z in response.json()["zones"])


def test_sites_in_buffer_action(client: TestClient):
    payload = {"center": {"lat": -8.650, "lng": 116.300}, "sites": SITES, "radiusM": 1000}

    response = client.post("/actions/sites_in_buffer", json=payload)
    assert response.status_code == 200
    assert [s["id"] for s in response.json()["sites"]] == ["site-1", "site-2"]


def test_route_action(client: TestClient):
    payload = {
        "points": [
            {"lat": 0, "lng": 0, "name": "start"},
            {"lat": 0, "lng": 3, "name": "far"},
            {"lat": 0, "lng": 1, "name": "near", "description": "closest"},
        ]
    }

    response = client.post("/actions/route", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert [s["name"] for s in data["stops"]] == ["start", "near", "far"]
    assert data["route"][1] == {"lat": 0, "lng": 1}
    assert data["stops"][1]["description"] == "closest"
    assert len(data["legDistancesM"]) == 2
    assert data["totalDistanceM"] == pytest.approx(sum(data["legDistancesM"]))
    assert data["sequenceMethod"] == "nearest_neighbor"


def test_route_action_empty(client: TestClient):
    response = client.post("/actions/route", json={"points": []})
    assert response.json()["route"] == []


def test_clusters_action(client: TestClient):
    response = client.post("/actions/clusters", json={"sites": SITES})
    assert response.status_code == 200

    data = response.json()
    assert len(data["clusters"]) == 1
    cluster = data["clusters"][0]
    assert cluster["id"] == "cluster-0"
    assert cluster["siteCount"] == 2
    assert [s["id"] for s in cluster["sites"]] == ["site-1", "site-2"]
    assert data["diagnostics"]["numPoints"] == 3
    assert data["diagnostics"]["thresholdM"] == 2000


def test_clusters_action_custom_threshold(client: TestClient):
    response = client.post("/actions/clusters", json={"sites": SITES, "thresholdM": 50_000})
    assert response.json()["clusters"][0]["siteCount"] == 3


def test_spatial_stats_action(client: TestClient):
    response = client.post("/actions/spatial_stats", json={"sites": SITES})
    assert response.status_code == 200

    data = response.json()
    assert data["totalSites"] == 3
    assert data["averageDistance"] > 0
    assert data["density"] > 0
    assert len(data["clusters"]) == 1


def test_spatial_stats_action_empty(client: TestClient):
    response = client.post("/actions/spatial_stats", json={"sites": []})
    assert response.json() == {
        "totalSites": 0,
        "averageDistance": 0.0,
        "density": 0.0,
        "clusters": [],
    }


def test_export_geojson_action(client: TestClient):
    response = client.post("/actions/export_geojson", json={"sites": SITES})
    assert response.status_code == 200

    data = response.json()
    assert data["type"] == "FeatureCollection"
    assert len(data["features"]) == 3
    assert data["features"][0]["geometry"]["coordinates"] == [116.300, -8.650]
    assert data["features"][0]["properties"]["localName"] == "Pura Meru Cakranegara"


def test_route_stats_action(client: TestClient):
    payload = {
        "stops": [
            {"site": SITES[0], "visitDurationMinutes": 90},
            {"site": SITES[1]},
        ]
    }

    response = client.post("/actions/route_stats", json=payload)
    assert response.status_code == 200

    data = response.json()
    assert data["totalSites"] == 2
    assert data["totalDuration"] == 150
    assert data["totalDistance"] == pytest.approx(0.16, abs=0.01)
    assert data["averageRating"] == 8.5


def test_route_stats_rejects_negative_duration(client: TestClient):
    payload = {"stops": [{"site": SITES[0], "visitDurationMinutes": -5}]}
    assert client.post("/actions/route_stats", json=payload).status_code == 422


def test_overlays_default_profile(client: TestClient):
    response = client.get("/actions/overlays")
    assert response.status_code == 200

    overlays = response.json()["overlays"]
    assert [o["id"] for o in overlays] == ["roads-overlay", "rivers-overlay", "villages-overlay"]
    assert [o["type"] for o in overlays] == ["roads", "rivers", "villages"]
    assert all(o["data"] == {"type": "FeatureCollection", "features": []} for o in overlays)


def test_overlays_unknown_profile(client: TestClient):
    response = client.get("/actions/overlays", params={"profile": "atlantis"})
    assert response.status_code == 404


def test_overlays_provider_failure(client: TestClient, monkeypatch):
    class BrokenProvider:
        async def fetch(self, kind, bbox):
            raise OverlayFetchFailed(OverlayKind.ROADS, "timeout")

    monkeypatch.setattr(
        "apps.analysis_server.main.get_overlay_provider", lambda settings: BrokenProvider()
    )

    response = client.get("/actions/overlays")
    assert response.status_code == 502
    assert "timeout" in response.json()["detail"]
