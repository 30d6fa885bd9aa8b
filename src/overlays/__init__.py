"""Map overlays (roads, rivers, villages) supplied by external providers."""

from .models import (
    BoundingBox,
    OVERLAY_DEFAULTS,
    OverlayKind,
    PROVIDER_KINDS,
    SpatialOverlay,
    build_custom_overlay,
    build_overlay,
)
from .provider import (
    EmptyOverlayProvider,
    OverlayFetchFailed,
    OverlayProvider,
    get_default_overlays,
    get_overlay,
)
from .overpass import OverpassOverlayProvider, build_overpass_query

__all__ = [
    "BoundingBox",
    "OVERLAY_DEFAULTS",
    "OverlayKind",
    "PROVIDER_KINDS",
    "SpatialOverlay",
    "build_custom_overlay",
    "build_overlay",
    "EmptyOverlayProvider",
    "OverlayFetchFailed",
    "OverlayProvider",
    "get_default_overlays",
    "get_overlay",
    "OverpassOverlayProvider",
    "build_overpass_query",
]
