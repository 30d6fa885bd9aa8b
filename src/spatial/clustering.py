"""
Seed-anchored proximity clustering of heritage sites.

This module provides:
1. Greedy single-pass clustering (O(n²)) with a distance threshold
2. Cluster centroids and sequential ids
3. Diagnostics with actionable suggestions

Membership is measured against each cluster's seed site, never against the
evolving cluster or its centroid. A site close to a later member but outside
the threshold of the seed is not added. This is not
single-linkage clustering; keep the seed-anchored grouping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from .geodesy import GeoPoint, haversine_m
from .models import Cluster, Site, geotagged


logger = logging.getLogger(__name__)


DEFAULT_CLUSTER_THRESHOLD_M = 2000.0


@dataclass
class ClusteringConfig:
    """Configuration for seed-anchored clustering."""

    threshold_m: float = DEFAULT_CLUSTER_THRESHOLD_M
    """Maximum seed-to-member distance (metres, inclusive)."""


@dataclass
class ClusteringDiagnostics:
    """Summary of a clustering run."""

    num_points: int
    """Geotagged sites considered."""

    num_clusters: int
    """Clusters emitted (size >= 2)."""

    num_unclustered: int
    """Geotagged sites that ended up in no emitted cluster."""

    threshold_m: float
    """Threshold used."""

    cluster_sizes: List[int] = field(default_factory=list)
    """Size of each emitted cluster."""

    suggestions: List[str] = field(default_factory=list)
    """Actionable suggestions for tuning the threshold."""


def cluster_center(points: List[GeoPoint]) -> GeoPoint:
    """Arithmetic mean of ``points`` (``(0, 0)`` for an empty list)."""

    if not points:
        return GeoPoint(0.0, 0.0)
    n = len(points)
    return GeoPoint(
        sum(p.lat for p in points) / n,
        sum(p.lng for p in points) / n,
    )


def identify_clusters(
    sites: Iterable[Site],
    threshold_m: float = DEFAULT_CLUSTER_THRESHOLD_M,
) -> List[Cluster]:
    """
    Group sites into seed-anchored proximity clusters.

    Algorithm:
    1. Walk geotagged sites in input order, skipping already assigned ones
    2. The current site becomes the seed of a new group
    3. Every later unassigned site within ``threshold_m`` of the seed
       (inclusive) joins the group
    4. Groups with a single member are discarded

    Args:
        sites: Candidate sites; untagged sites are ignored
        threshold_m: Maximum distance to the seed in metres

    Returns:
        Clusters with ids ``cluster-0``, ``cluster-1``, ... in seed order
    """
    pairs = geotagged(sites)
    if not pairs:
        return []

    assigned: Set[str] = set()
    groups: List[List[Tuple[Site, GeoPoint]]] = []

    for seed, seed_point in pairs:
        if seed.id in assigned:
            continue

        group = [(seed, seed_point)]
        assigned.add(seed.id)

        for other, other_point in pairs:
            if other.id in assigned:
                continue
            if haversine_m(seed_point, other_point) <= threshold_m:
                group.append((other, other_point))
                assigned.add(other.id)

        if len(group) > 1:
            groups.append(group)

    clusters = [
        Cluster(
            id=f"cluster-{index}",
            members=tuple(site for site, _ in group),
            center=cluster_center([point for _, point in group]),
        )
        for index, group in enumerate(groups)
    ]

    logger.debug(
        "Clustered %d geotagged sites into %d clusters (threshold=%.0fm)",
        len(pairs), len(clusters), threshold_m,
    )
    return clusters


def cluster_with_diagnostics(
    sites: Iterable[Site],
    config: Optional[ClusteringConfig] = None,
) -> Tuple[List[Cluster], ClusteringDiagnostics]:
    """
    Run :func:`identify_clusters` and describe the result.

    Returns:
        (clusters, diagnostics)
    """
    if config is None:
        config = ClusteringConfig()

    sites = list(sites)
    num_points = len(geotagged(sites))
    clusters = identify_clusters(sites, config.threshold_m)
    cluster_sizes = [c.site_count for c in clusters]
    num_unclustered = num_points - sum(cluster_sizes)

    suggestions: List[str] = []
    if num_points < 2:
        suggestions.append(
            f"Only {num_points} geotagged site(s) provided, need at least 2 for clustering."
        )
    elif not clusters:
        suggestions.append(
            f"No two sites lie within {config.threshold_m:.0f}m of each other. "
            "Consider widening the clustering threshold."
        )
    elif num_unclustered > num_points * 0.5:
        suggestions.append(
            f"High isolation ratio ({num_unclustered}/{num_points} = "
            f"{num_unclustered / num_points:.1%}). Consider widening the clustering threshold."
        )

    if clusters and max(cluster_sizes) > num_points * 0.8 and num_points >= 5:
        suggestions.append(
            "One cluster holds most sites. Consider narrowing the clustering threshold."
        )

    diagnostics = ClusteringDiagnostics(
        num_points=num_points,
        num_clusters=len(clusters),
        num_unclustered=num_unclustered,
        threshold_m=config.threshold_m,
        cluster_sizes=cluster_sizes,
        suggestions=suggestions,
    )
    return clusters, diagnostics


__all__ = [
    "ClusteringConfig",
    "ClusteringDiagnostics",
    "DEFAULT_CLUSTER_THRESHOLD_M",
    "cluster_center",
    "cluster_with_diagnostics",
    "identify_clusters",
]
