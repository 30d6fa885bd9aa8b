"""Summary statistics for curated tourism routes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..spatial.geodesy import haversine_m
from ..spatial.models import Site


DEFAULT_VISIT_DURATION_MIN = 60


def round_half_up(value: float, ndigits: int) -> float:
    """Round to ``ndigits`` decimals with halves going up (8.25 -> 8.3)."""
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True)
class RouteStop:
    """A site on a curated route, in visiting order."""

    site: Site
    visit_duration_minutes: Optional[int] = None


@dataclass
class RouteStats:
    """Totals for a curated route."""

    total_sites: int
    total_duration_min: int
    total_distance_km: float
    average_significance: float

    def to_dict(self) -> dict:
        return {
            "totalSites": self.total_sites,
            "totalDuration": self.total_duration_min,
            "totalDistance": self.total_distance_km,
            "averageRating": self.average_significance,
        }


def calculate_route_stats(stops: Sequence[RouteStop]) -> RouteStats:
    """
    Total visit time, leg distance and mean significance of a route.

    Stops are taken in the given order (the curated sequence), not
    re-ordered. A leg is counted only when both of its stops are geotagged.
    Stops without a visit duration count as 60 minutes and stops without a
    significance score count as 0.

    Returns:
        RouteStats with distance in km rounded to 2 decimals and average
        significance rounded to 1 decimal
    """
    total_sites = len(stops)
    if total_sites == 0:
        return RouteStats(
            total_sites=0,
            total_duration_min=0,
            total_distance_km=0.0,
            average_significance=0.0,
        )

    total_duration = sum(
        stop.visit_duration_minutes or DEFAULT_VISIT_DURATION_MIN for stop in stops
    )
    average_significance = (
        sum(stop.site.significance_score or 0.0 for stop in stops) / total_sites
    )

    legs: List[float] = []
    for prev, curr in zip(stops, stops[1:]):
        if prev.site.point is None or curr.site.point is None:
            continue
        legs.append(haversine_m(prev.site.point, curr.site.point))

    return RouteStats(
        total_sites=total_sites,
        total_duration_min=int(total_duration),
        total_distance_km=round_half_up(sum(legs) / 1000.0, 2),
        average_significance=round_half_up(average_significance, 1),
    )


__all__ = [
    "DEFAULT_VISIT_DURATION_MIN",
    "RouteStats",
    "RouteStop",
    "calculate_route_stats",
    "round_half_up",
]
