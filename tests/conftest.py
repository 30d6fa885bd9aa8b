"""
Pytest configuration and shared fixtures for heritage spatial analysis tests.

This file provides:
- Sample heritage sites around Lombok (geotagged and untagged)
- Route waypoints
- Fake overlay providers
- Common test utilities
"""

from typing import Any, Dict, List

import pytest
import pandas as pd

from src.overlays import BoundingBox, OverlayKind
from src.routing import RoutePoint
from src.spatial import ABSENT, GeoPoint, Site, coordinates_from


# ==============================================================================
# Sample Sites
# ==============================================================================

def make_site(site_id: str, lat=None, lng=None, **kwargs) -> Site:
    """Build a Site with nullable coordinates."""
    return Site(id=site_id, coordinates=coordinates_from(lat, lng), **kwargs)


@pytest.fixture
def sample_sites() -> List[Site]:
    """Geotagged heritage sites in Lombok plus one untagged record."""
    return [
        make_site(
            "site-1",
            -8.650, 116.300,
            name="Pura Meru",
            local_name="Pura Meru Cakranegara",
            category_name="Temple",
            category_color="#ef4444",
            significance_score=9.0,
            preservation_status="good",
        ),
        make_site(
            "site-2",
            -8.651, 116.301,
            name="Taman Mayura",
            local_name="Taman Mayura",
            category_name="Garden",
            category_color="#22c55e",
            significance_score=8.0,
            preservation_status="fair",
        ),
        make_site(
            "site-3",
            -8.800, 116.500,
            name="Desa Sade",
            local_name="Dusun Sade",
            category_name="Traditional Village",
            significance_score=7.5,
            preservation_status="good",
        ),
        Site(
            id="site-4",
            name="Unmapped Manuscript Archive",
            coordinates=ABSENT,
            significance_score=6.0,
            preservation_status="poor",
        ),
    ]


@pytest.fixture
def reference_cluster_sites() -> List[Site]:
    """Two sites ~150 m apart and one ~25 km away."""
    return [
        make_site("S1", -8.650, 116.300, name="S1"),
        make_site("S2", -8.651, 116.301, name="S2"),
        make_site("S3", -8.800, 116.500, name="S3"),
    ]


@pytest.fixture
def sample_site_records() -> List[Dict[str, Any]]:
    """Rows as returned by the sites_with_categories view."""
    return [
        {
            "id": "rec-1",
            "name": "Masjid Kuno Bayan Beleq",
            "local_name": "Masjid Bayan Beleq",
            "category_name": "Mosque",
            "category_color": "#0ea5e9",
            "latitude": -8.2746,
            "longitude": 116.4192,
            "cultural_significance_score": 9.5,
            "preservation_status": "good",
        },
        {
            "id": "rec-2",
            "name": "Makam Selaparang",
            "local_name": None,
            "category_name": "Tomb",
            "category_color": None,
            "latitude": None,
            "longitude": None,
            "cultural_significance_score": None,
            "preservation_status": "fair",
        },
    ]


@pytest.fixture
def sample_site_df(sample_site_records) -> pd.DataFrame:
    return pd.DataFrame(sample_site_records)


# ==============================================================================
# Route Waypoints
# ==============================================================================

@pytest.fixture
def equator_waypoints() -> List[RoutePoint]:
    """Waypoints on the equator given out of order."""
    return [
        RoutePoint(GeoPoint(0.0, 0.0), "start"),
        RoutePoint(GeoPoint(0.0, 3.0), "far"),
        RoutePoint(GeoPoint(0.0, 1.0), "near"),
        RoutePoint(GeoPoint(0.0, 2.0), "middle"),
    ]


# ==============================================================================
# Overlays
# ==============================================================================

@pytest.fixture
def lombok_bbox() -> BoundingBox:
    return BoundingBox(south=-9.1, west=115.8, north=-8.2, east=116.8)


class StaticOverlayProvider:
    """Provider returning a fixed collection and recording calls."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data
        self.calls: List[OverlayKind] = []

    async def fetch(self, kind, bbox):
        self.calls.append(kind)
        return self.data


class FailingOverlayProvider:
    """Provider that always raises."""

    def __init__(self, exc: Exception):
        self.exc = exc

    async def fetch(self, kind, bbox):
        raise self.exc


@pytest.fixture
def failing_provider() -> FailingOverlayProvider:
    return FailingOverlayProvider(ConnectionError("overpass unreachable"))


# ==============================================================================
# Environment Setup
# ==============================================================================

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep profile selection independent of the developer's shell."""
    monkeypatch.delenv("ANALYSIS_PROFILE", raising=False)
    monkeypatch.delenv("OVERPASS_URL", raising=False)
    yield


# ==============================================================================
# Utilities
# ==============================================================================

def assert_approx_equal(a: float, b: float, tolerance: float = 0.01):
    """Assert two floats are approximately equal."""
    assert abs(a - b) < tolerance, f"{a} != {b} (tolerance={tolerance})"
