"""
Nearest-neighbour visiting order for a list of waypoints.

This module provides a simple greedy tour construction:
- The first waypoint is always the start
- From the current point, travel to the closest unvisited waypoint
- Repeat until every waypoint has been visited

The heuristic is O(n²) and fast, but the resulting route is NOT guaranteed
to be the shortest tour. There is no road network involved; legs are
great-circle distances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from ..spatial.geodesy import GeoPoint, haversine_m, haversine_many


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutePoint:
    """A waypoint to visit; not necessarily a catalogued site."""

    point: GeoPoint
    name: str
    description: Optional[str] = None


@dataclass
class RouteSequenceResult:
    """Result from nearest-neighbour sequencing."""

    points: List[RoutePoint]
    """Waypoints in visiting order."""

    leg_distances_m: List[float] = field(default_factory=list)
    """Distance of each leg (``len(points) - 1`` entries)."""

    total_distance_m: float = 0.0
    """Sum of leg distances."""

    sequence_method: str = "nearest_neighbor"

    @property
    def route(self) -> List[GeoPoint]:
        return [p.point for p in self.points]


def _nearest_neighbor_order(points: Sequence[RoutePoint]) -> List[int]:
    """Return input indices in nearest-neighbour visiting order."""

    if not points:
        return []

    remaining = list(range(1, len(points)))
    lats = np.array([p.point.lat for p in points], dtype=float)
    lngs = np.array([p.point.lng for p in points], dtype=float)

    order = [0]
    while remaining:
        current = points[order[-1]].point
        distances = haversine_many(current, lats[remaining], lngs[remaining])
        # argmin returns the first minimum: exact ties go to the earliest waypoint
        nearest = int(np.argmin(distances))
        order.append(remaining.pop(nearest))

    return order


def generate_route(points: Sequence[RoutePoint]) -> List[GeoPoint]:
    """
    Order waypoints with the nearest-neighbour heuristic.

    Args:
        points: Waypoints; the first one is the start of the route

    Returns:
        Coordinates in visiting order. Same length as ``points`` and a
        permutation of their coordinates. Empty input gives an empty route.

    Example:
        >>> start = RoutePoint(GeoPoint(-8.65, 116.3), "Start")
        >>> generate_route([start])
        [GeoPoint(lat=-8.65, lng=116.3)]
    """
    return [points[i].point for i in _nearest_neighbor_order(points)]


def route_length_m(route: Sequence[GeoPoint]) -> float:
    """Sum of great-circle legs along ``route`` (0 for fewer than two points)."""

    return sum(haversine_m(a, b) for a, b in zip(route, route[1:]))


def sequence_route(points: Sequence[RoutePoint]) -> RouteSequenceResult:
    """
    Nearest-neighbour sequencing that keeps waypoint metadata.

    Same ordering as :func:`generate_route`, plus leg and total distances.
    """
    ordered = [points[i] for i in _nearest_neighbor_order(points)]
    legs = [haversine_m(a.point, b.point) for a, b in zip(ordered, ordered[1:])]
    total = sum(legs)

    logger.debug("Sequenced %d waypoints, total %.1fm", len(ordered), total)

    return RouteSequenceResult(
        points=ordered,
        leg_distances_m=legs,
        total_distance_m=total,
        sequence_method="nearest_neighbor",
    )


__all__ = [
    "RoutePoint",
    "RouteSequenceResult",
    "generate_route",
    "route_length_m",
    "sequence_route",
]
