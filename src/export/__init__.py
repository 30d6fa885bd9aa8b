"""Interchange export (GeoJSON)."""

from .geojson import (
    dumps_geojson,
    empty_feature_collection,
    export_as_geojson,
    from_geojson_position,
    site_properties,
    site_to_feature,
    to_geojson_position,
)

__all__ = [
    "dumps_geojson",
    "empty_feature_collection",
    "export_as_geojson",
    "from_geojson_position",
    "site_properties",
    "site_to_feature",
    "to_geojson_position",
]
