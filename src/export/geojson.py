"""
GeoJSON export of heritage sites.

GeoJSON positions are ``[longitude, latitude]`` while the rest of the
engine uses ``(lat, lng)``. The axis swap happens only in
:func:`to_geojson_position` / :func:`from_geojson_position`; nothing else
should build a GeoJSON position by hand.

Reference: RFC 7946, section 3.1.1 (Position).
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..spatial.geodesy import GeoPoint
from ..spatial.models import Site, geotagged


def to_geojson_position(point: GeoPoint) -> List[float]:
    """Convert an internal ``(lat, lng)`` point to a GeoJSON ``[lng, lat]`` position."""
    return [point.lng, point.lat]


def from_geojson_position(position: Sequence[float]) -> GeoPoint:
    """Convert a GeoJSON ``[lng, lat]`` position back to a :class:`GeoPoint`."""
    lng, lat = position[0], position[1]
    return GeoPoint(lat=lat, lng=lng)


def empty_feature_collection() -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": []}


def site_properties(site: Site) -> Dict[str, Any]:
    """Feature properties for a site, copied verbatim."""
    return {
        "id": site.id,
        "name": site.name,
        "localName": site.local_name,
        "category": site.category_name,
        "significance": site.significance_score,
        "preservationStatus": site.preservation_status,
    }


def site_to_feature(site: Site, point: GeoPoint) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {
            "type": "Point",
            "coordinates": to_geojson_position(point),
        },
        "properties": site_properties(site),
    }


def export_as_geojson(sites: Iterable[Site]) -> Dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection of Point features.

    Args:
        sites: Sites to export; untagged sites produce no feature

    Returns:
        ``{"type": "FeatureCollection", "features": [...]}`` with features in
        input order
    """
    collection = empty_feature_collection()
    collection["features"] = [site_to_feature(site, point) for site, point in geotagged(sites)]
    return collection


def dumps_geojson(sites: Iterable[Site], indent: Optional[int] = None) -> str:
    """Serialise :func:`export_as_geojson` output to JSON text."""
    return json.dumps(export_as_geojson(sites), ensure_ascii=False, indent=indent)


__all__ = [
    "dumps_geojson",
    "empty_feature_collection",
    "export_as_geojson",
    "from_geojson_position",
    "site_properties",
    "site_to_feature",
    "to_geojson_position",
]
