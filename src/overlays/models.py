"""Overlay data models: kinds, bounding boxes and the overlay container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from ..export.geojson import empty_feature_collection


class OverlayKind(Enum):
    """Supported overlay layers."""
    ROADS = "roads"
    RIVERS = "rivers"
    VILLAGES = "villages"
    CUSTOM = "custom"


# Kinds that an external provider is expected to supply
PROVIDER_KINDS = (OverlayKind.ROADS, OverlayKind.RIVERS, OverlayKind.VILLAGES)


@dataclass(frozen=True)
class OverlayDefaults:
    """Display defaults for a provider-backed overlay kind."""
    name: str
    opacity: float
    visible: bool = True


OVERLAY_DEFAULTS: Dict[OverlayKind, OverlayDefaults] = {
    OverlayKind.ROADS: OverlayDefaults(name="Jalan Raya", opacity=0.7),
    OverlayKind.RIVERS: OverlayDefaults(name="Sungai", opacity=0.6),
    OverlayKind.VILLAGES: OverlayDefaults(name="Desa/Kelurahan", opacity=0.5),
}


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box in decimal degrees."""

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_corners(cls, a_lat: float, a_lng: float, b_lat: float, b_lng: float) -> "BoundingBox":
        """Build a box from any two opposite corners."""
        return cls(
            south=min(a_lat, b_lat),
            west=min(a_lng, b_lng),
            north=max(a_lat, b_lat),
            east=max(a_lng, b_lng),
        )

    def rounded(self, ndigits: int = 4) -> tuple:
        return (
            round(self.south, ndigits),
            round(self.west, ndigits),
            round(self.north, ndigits),
            round(self.east, ndigits),
        )


@dataclass
class SpatialOverlay:
    """A map overlay layer backed by a GeoJSON FeatureCollection."""

    id: str
    name: str
    kind: OverlayKind
    data: Dict[str, Any] = field(default_factory=empty_feature_collection)
    visible: bool = True
    opacity: float = 1.0

    @property
    def feature_count(self) -> int:
        return len(self.data.get("features", []))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "data": self.data,
            "visible": self.visible,
            "opacity": self.opacity,
        }


def build_overlay(kind: OverlayKind, data: Dict[str, Any]) -> SpatialOverlay:
    """Wrap provider ``data`` in an overlay with the kind's display defaults."""

    defaults = OVERLAY_DEFAULTS[kind]
    return SpatialOverlay(
        id=f"{kind.value}-overlay",
        name=defaults.name,
        kind=kind,
        data=data,
        visible=defaults.visible,
        opacity=defaults.opacity,
    )


def build_custom_overlay(
    overlay_id: str,
    name: str,
    data: Dict[str, Any],
    *,
    visible: bool = True,
    opacity: float = 1.0,
) -> SpatialOverlay:
    """Overlay for caller-supplied features (not fetched from a provider)."""

    return SpatialOverlay(
        id=overlay_id,
        name=name,
        kind=OverlayKind.CUSTOM,
        data=data,
        visible=visible,
        opacity=opacity,
    )


__all__ = [
    "BoundingBox",
    "OVERLAY_DEFAULTS",
    "OverlayDefaults",
    "OverlayKind",
    "PROVIDER_KINDS",
    "SpatialOverlay",
    "build_custom_overlay",
    "build_overlay",
]
