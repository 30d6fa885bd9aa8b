"""
Overlay provider boundary.

The engine only defines what an overlay looks like. Actual road, river and
village data comes from an injected provider: any object with an async
``fetch(kind, bbox)`` returning a GeoJSON FeatureCollection. Failures are
surfaced as :class:`OverlayFetchFailed` so callers can tell "nothing yet"
(an empty collection) from "could not fetch" (an error).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

from ..export.geojson import empty_feature_collection
from .models import PROVIDER_KINDS, BoundingBox, OverlayKind, SpatialOverlay, build_overlay


logger = logging.getLogger(__name__)


class OverlayFetchFailed(RuntimeError):
    """Raised when an overlay provider could not deliver data."""

    def __init__(self, kind: OverlayKind, reason: str):
        self.kind = kind
        self.reason = reason
        super().__init__(f"Failed to fetch {kind.value} overlay: {reason}")


class OverlayProvider(Protocol):
    """Anything that can supply features for an overlay kind and area."""

    async def fetch(self, kind: OverlayKind, bbox: BoundingBox) -> Dict[str, Any]:
        ...


class EmptyOverlayProvider:
    """Provider returning empty collections until a real source is wired in."""

    async def fetch(self, kind: OverlayKind, bbox: BoundingBox) -> Dict[str, Any]:
        return empty_feature_collection()


def _validate_collection(kind: OverlayKind, data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise OverlayFetchFailed(kind, "provider did not return a FeatureCollection")
    if not isinstance(data.get("features"), list):
        raise OverlayFetchFailed(kind, "FeatureCollection has no 'features' list")
    return data


async def get_overlay(
    kind: OverlayKind,
    bbox: BoundingBox,
    provider: Optional[OverlayProvider] = None,
) -> SpatialOverlay:
    """
    Fetch one overlay layer for ``bbox``.

    Args:
        kind: Roads, rivers or villages (custom overlays are not fetched)
        bbox: Area of interest
        provider: Data source (defaults to :class:`EmptyOverlayProvider`)

    Returns:
        SpatialOverlay with the kind's display defaults

    Raises:
        ValueError: If ``kind`` is not provider-backed
        OverlayFetchFailed: If the provider fails or returns malformed data
    """
    if kind not in PROVIDER_KINDS:
        raise ValueError(f"Overlay kind '{kind.value}' is not fetched from a provider")

    if provider is None:
        provider = EmptyOverlayProvider()

    try:
        data = await provider.fetch(kind, bbox)
    except OverlayFetchFailed:
        logger.error("Overlay provider failed for %s", kind.value)
        raise
    except Exception as exc:
        logger.error("Overlay provider failed for %s: %s", kind.value, exc)
        raise OverlayFetchFailed(kind, str(exc) or type(exc).__name__) from exc

    return build_overlay(kind, _validate_collection(kind, data))


async def get_default_overlays(
    bbox: BoundingBox,
    provider: Optional[OverlayProvider] = None,
) -> List[SpatialOverlay]:
    """Fetch roads, rivers and villages concurrently, in that order."""

    return list(
        await asyncio.gather(*(get_overlay(kind, bbox, provider) for kind in PROVIDER_KINDS))
    )


__all__ = [
    "EmptyOverlayProvider",
    "OverlayFetchFailed",
    "OverlayProvider",
    "get_default_overlays",
    "get_overlay",
]
