"""Aggregate spatial statistics over a set of sites."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List

from .clustering import DEFAULT_CLUSTER_THRESHOLD_M, identify_clusters
from .geodesy import GeoPoint, haversine_m
from .models import Site, SpatialStats, geotagged


logger = logging.getLogger(__name__)


COINCIDENT_TOLERANCE_M = 1e-6
"""Average distances below this count as a zero-area set for density (all sites coincident)."""


def compute_centroid(points: List[GeoPoint]) -> GeoPoint:
    """
    Coordinate-wise mean of ``points``.

    Each point contributes ``coordinate / n``; the result is the same mean
    as summing first, up to rounding.
    """
    n = len(points)
    if n == 0:
        return GeoPoint(0.0, 0.0)

    lat = 0.0
    lng = 0.0
    for point in points:
        lat += point.lat / n
        lng += point.lng / n
    return GeoPoint(lat, lng)


def calculate_spatial_stats(
    sites: Iterable[Site],
    cluster_threshold_m: float = DEFAULT_CLUSTER_THRESHOLD_M,
) -> SpatialStats:
    """
    Centroid dispersion, density and clusters for a site set.

    Density treats the sites as uniformly filling a disk whose radius is the
    average distance from the centroid: ``n / (pi * avg_km ** 2)``. When the
    average distance is zero (one site, or all coincident, up to
    :data:`COINCIDENT_TOLERANCE_M`) the density is 0; the average itself is
    reported as computed.

    Args:
        sites: Input sites; untagged sites are ignored
        cluster_threshold_m: Threshold passed to the cluster analysis

    Returns:
        :class:`SpatialStats` counting only geotagged sites
    """
    pairs = geotagged(sites)
    if not pairs:
        return SpatialStats.empty()

    points = [point for _, point in pairs]
    centroid = compute_centroid(points)

    distances = [haversine_m(centroid, point) for point in points]
    average_distance = sum(distances) / len(distances)
    if average_distance < COINCIDENT_TOLERANCE_M:
        # coincident points: per-point division leaves sub-micrometre residue
        density = 0.0
    else:
        density = len(points) / (math.pi * (average_distance / 1000.0) ** 2)

    clusters = identify_clusters([site for site, _ in pairs], cluster_threshold_m)

    logger.debug(
        "Spatial stats: %d sites, avg distance %.1fm, density %.3f/km², %d clusters",
        len(points), average_distance, density, len(clusters),
    )

    return SpatialStats(
        total_sites=len(points),
        average_distance_m=average_distance,
        density_per_km2=density,
        clusters=clusters,
    )


__all__ = ["calculate_spatial_stats", "compute_centroid"]
