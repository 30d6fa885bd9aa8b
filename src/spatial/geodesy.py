"""
Great-circle distance and coordinate primitives.

Everything in the analysis engine measures distance through this module.
Coordinates are decimal degrees on a WGS84-like sphere; no datum
correction is performed and out-of-range values are not validated.

Optional coordinates coming from the site repository are normalised once
into the :data:`Coordinates` sum type (``Present`` or ``Absent``) so that
"not geotagged" is a single branch instead of repeated null checks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np


EARTH_RADIUS_M = 6_371_000.0
"""Mean Earth radius used by the haversine formula (metres)."""


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def as_tuple(self) -> tuple:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Present:
    """Coordinates that are known."""

    point: GeoPoint


@dataclass(frozen=True)
class Absent:
    """Marker for a site that is not geotagged."""


ABSENT = Absent()

Coordinates = Union[Present, Absent]


def _is_missing(value: Optional[float]) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def coordinates_from(lat: Optional[float], lng: Optional[float]) -> Coordinates:
    """
    Build a :data:`Coordinates` value from nullable latitude/longitude.

    Both values must be present; a site with only one of them is treated as
    not geotagged. ``0.0`` is a valid coordinate.
    """
    if _is_missing(lat) or _is_missing(lng):
        return ABSENT
    return Present(GeoPoint(float(lat), float(lng)))


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points in metres.

    Uses the haversine formula with :data:`EARTH_RADIUS_M`. Symmetric, and
    ``haversine_m(p, p) == 0`` for any point.

    Example:
        >>> round(haversine_m(GeoPoint(0, 0), GeoPoint(0, 1)))
        111195
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # rounding can push antipodal pairs just above 1
    h = min(1.0, h)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def haversine_many(origin: GeoPoint, lats, lngs) -> np.ndarray:
    """
    Vectorised haversine from ``origin`` to each ``(lats[i], lngs[i])``.

    Args:
        origin: Reference point
        lats: Array-like of latitudes (degrees)
        lngs: Array-like of longitudes (degrees)

    Returns:
        Array of distances in metres, same length as the inputs
    """
    lats = np.asarray(lats, dtype=float)
    lngs = np.asarray(lngs, dtype=float)

    phi1 = np.radians(origin.lat)
    phi2 = np.radians(lats)
    d_phi = np.radians(lats - origin.lat)
    d_lambda = np.radians(lngs - origin.lng)

    h = np.sin(d_phi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(d_lambda / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))
    return EARTH_RADIUS_M * c


__all__ = [
    "ABSENT",
    "Absent",
    "Coordinates",
    "EARTH_RADIUS_M",
    "GeoPoint",
    "Present",
    "coordinates_from",
    "haversine_m",
    "haversine_many",
]
