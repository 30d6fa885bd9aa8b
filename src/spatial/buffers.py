"""
Buffer zones and radius-based proximity filtering.

A buffer zone is a declaration of centre + radius for the map layer; it is
not a containment test. Use :func:`find_sites_in_buffer` to actually select
sites within a radius of a point.
"""

from __future__ import annotations

from typing import Iterable, List

from .geodesy import GeoPoint, haversine_m
from .models import DEFAULT_SITE_COLOR, DEFAULT_SITE_NAME, BufferZone, Site, geotagged


DEFAULT_BUFFER_RADIUS_M = 500.0


def create_buffer_zones(
    sites: Iterable[Site],
    radius_m: float = DEFAULT_BUFFER_RADIUS_M,
) -> List[BufferZone]:
    """
    Create one buffer zone per geotagged site.

    Args:
        sites: Sites in display order
        radius_m: Zone radius in metres, passed through as given (zero or
            negative values produce a degenerate zone, they are not rejected)

    Returns:
        Buffer zones in the order of the geotagged input sites
    """
    return [
        BufferZone(
            center=point,
            radius_m=radius_m,
            site_id=site.id,
            site_name=site.name or DEFAULT_SITE_NAME,
            color=site.category_color or DEFAULT_SITE_COLOR,
        )
        for site, point in geotagged(sites)
    ]


def find_sites_in_buffer(
    center: GeoPoint,
    sites: Iterable[Site],
    radius_m: float,
) -> List[Site]:
    """
    Return geotagged sites whose distance to ``center`` is <= ``radius_m``.

    The boundary is inclusive. Sites without coordinates are skipped.
    """
    return [
        site
        for site, point in geotagged(sites)
        if haversine_m(center, point) <= radius_m
    ]


__all__ = [
    "DEFAULT_BUFFER_RADIUS_M",
    "create_buffer_zones",
    "find_sites_in_buffer",
]
