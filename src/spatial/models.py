"""Data models shared by the spatial analysis components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .geodesy import ABSENT, Coordinates, GeoPoint, Present


DEFAULT_SITE_NAME = "Unknown Site"
DEFAULT_SITE_COLOR = "#3b82f6"


@dataclass(frozen=True)
class Site:
    """
    A cultural-heritage site as supplied by the site repository.

    Sites are read-only inputs; the engine never stores or mutates them.
    """

    id: str
    name: Optional[str] = None
    local_name: Optional[str] = None
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    coordinates: Coordinates = ABSENT
    significance_score: Optional[float] = None
    preservation_status: Optional[str] = None

    @property
    def point(self) -> Optional[GeoPoint]:
        """Site location, or None when the site is not geotagged."""
        if isinstance(self.coordinates, Present):
            return self.coordinates.point
        return None

    @property
    def is_geotagged(self) -> bool:
        return isinstance(self.coordinates, Present)

    @property
    def latitude(self) -> Optional[float]:
        point = self.point
        return point.lat if point else None

    @property
    def longitude(self) -> Optional[float]:
        point = self.point
        return point.lng if point else None


@dataclass(frozen=True)
class BufferZone:
    """Circular zone around a geotagged site, for rendering."""

    center: GeoPoint
    radius_m: float
    site_id: str
    site_name: str
    color: str


@dataclass(frozen=True)
class Cluster:
    """A group of at least two sites anchored on a seed site."""

    id: str
    """Sequential id (e.g. 'cluster-0')."""

    members: Tuple[Site, ...]
    """Member sites in input order; the seed comes first."""

    center: GeoPoint
    """Arithmetic mean of member coordinates."""

    @property
    def site_count(self) -> int:
        """Number of members (always at least 2)."""
        return len(self.members)


@dataclass
class SpatialStats:
    """Aggregate spatial statistics for a site set."""

    total_sites: int
    """Geotagged sites used in the computation."""

    average_distance_m: float
    """Mean distance from the centroid (metres)."""

    density_per_km2: float
    """Sites per km² of the disk with radius ``average_distance_m``."""

    clusters: List[Cluster] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "SpatialStats":
        return cls(total_sites=0, average_distance_m=0.0, density_per_km2=0.0, clusters=[])


def geotagged(sites) -> List[Tuple[Site, GeoPoint]]:
    """Return ``(site, point)`` pairs for geotagged sites, preserving order."""

    return [
        (site, site.coordinates.point)
        for site in sites
        if isinstance(site.coordinates, Present)
    ]


__all__ = [
    "BufferZone",
    "Cluster",
    "DEFAULT_SITE_COLOR",
    "DEFAULT_SITE_NAME",
    "Site",
    "SpatialStats",
    "geotagged",
]
