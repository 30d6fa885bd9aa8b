"""
OpenStreetMap overlay provider backed by the Overpass API.

This module provides:
- Per-kind Overpass QL queries (roads, rivers, villages)
- Conversion of Overpass elements into GeoJSON features
- Exponential backoff with jitter for retries
- TTL caching keyed on kind + rounded bounding box

Reference: https://wiki.openstreetmap.org/wiki/Overpass_API
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Dict, List, Optional, Tuple

import httpx
from cachetools import TTLCache

from ..export.geojson import empty_feature_collection, to_geojson_position
from ..spatial.geodesy import GeoPoint
from .models import BoundingBox, OverlayKind
from .provider import OverlayFetchFailed


logger = logging.getLogger(__name__)


# -----------------------------
# Constants
# -----------------------------

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"
DEFAULT_TIMEOUT_SEC = 30.0

# OSM data changes slowly; an hour is fine for map layers
CACHE_TTL_SEC = 60 * 60
CACHE_MAXSIZE = 256

# Retry configuration
MAX_RETRIES = 4
BACKOFF_BASE = 2
BACKOFF_MAX = 8

# Overpass QL filters per overlay kind
OVERPASS_FILTERS: Dict[OverlayKind, str] = {
    OverlayKind.ROADS: 'way["highway"~"^(motorway|trunk|primary|secondary|tertiary)$"]',
    OverlayKind.RIVERS: 'way["waterway"~"^(river|stream|canal)$"]',
    OverlayKind.VILLAGES: 'node["place"~"^(town|village|hamlet)$"]',
}

# Tag copied into feature properties for each kind
KIND_TAGS: Dict[OverlayKind, str] = {
    OverlayKind.ROADS: "highway",
    OverlayKind.RIVERS: "waterway",
    OverlayKind.VILLAGES: "place",
}


# -----------------------------
# Query building / parsing
# -----------------------------

def build_overpass_query(kind: OverlayKind, bbox: BoundingBox, timeout_sec: int = 25) -> str:
    """
    Build the Overpass QL query for ``kind`` inside ``bbox``.

    Raises:
        ValueError: If ``kind`` has no Overpass mapping
    """
    if kind not in OVERPASS_FILTERS:
        raise ValueError(f"No Overpass query defined for overlay kind '{kind.value}'")

    area = f"({bbox.south},{bbox.west},{bbox.north},{bbox.east})"
    return (
        f"[out:json][timeout:{timeout_sec}];"
        f"({OVERPASS_FILTERS[kind]}{area};);"
        "out geom;"
    )


def _element_properties(element: Dict[str, Any], kind: OverlayKind) -> Dict[str, Any]:
    tags = element.get("tags") or {}
    return {
        "osmId": element.get("id"),
        "osmType": element.get("type"),
        "name": tags.get("name"),
        KIND_TAGS[kind]: tags.get(KIND_TAGS[kind]),
    }


def element_to_feature(element: Dict[str, Any], kind: OverlayKind) -> Optional[Dict[str, Any]]:
    """
    Convert one Overpass element into a GeoJSON feature.

    Nodes become Points and ways become LineStrings. Elements without usable
    geometry return None.
    """
    element_type = element.get("type")

    if element_type == "node":
        if "lat" not in element or "lon" not in element:
            return None
        geometry = {
            "type": "Point",
            "coordinates": to_geojson_position(GeoPoint(element["lat"], element["lon"])),
        }
    elif element_type == "way":
        nodes = element.get("geometry") or []
        if len(nodes) < 2:
            return None
        geometry = {
            "type": "LineString",
            "coordinates": [
                to_geojson_position(GeoPoint(node["lat"], node["lon"])) for node in nodes
            ],
        }
    else:
        return None

    return {
        "type": "Feature",
        "geometry": geometry,
        "properties": _element_properties(element, kind),
    }


def overpass_to_feature_collection(payload: Dict[str, Any], kind: OverlayKind) -> Dict[str, Any]:
    """Convert an Overpass JSON response into a FeatureCollection."""

    elements = payload.get("elements")
    if not isinstance(elements, list):
        raise OverlayFetchFailed(kind, "Overpass response has no 'elements' list")

    collection = empty_feature_collection()
    for element in elements:
        feature = element_to_feature(element, kind)
        if feature is not None:
            collection["features"].append(feature)
    return collection


# -----------------------------
# Retry Logic
# -----------------------------

def exponential_backoff_with_jitter(attempt: int) -> float:
    """
    Calculate backoff time with exponential growth and jitter.

    Formula: min(BACKOFF_BASE^attempt + random(0,1), BACKOFF_MAX)
    """
    base_delay = BACKOFF_BASE ** attempt
    jitter = random.random()
    return min(base_delay + jitter, BACKOFF_MAX)


# -----------------------------
# Provider
# -----------------------------

class OverpassOverlayProvider:
    """Overlay provider querying an Overpass API endpoint."""

    def __init__(
        self,
        url: str = DEFAULT_OVERPASS_URL,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        max_retries: int = MAX_RETRIES,
        use_cache: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout_sec = timeout_sec
        self.max_retries = max(1, max_retries)
        self.use_cache = use_cache
        self._transport = transport
        self._cache: TTLCache = TTLCache(maxsize=CACHE_MAXSIZE, ttl=CACHE_TTL_SEC)

    def _cache_key(self, kind: OverlayKind, bbox: BoundingBox) -> Tuple:
        # ~10m precision lets nearby map views share a cache entry
        return (kind.value, bbox.rounded(4))

    async def _post(self, query: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self._transport) as client:
            response = await client.post(self.url, data={"data": query})
            response.raise_for_status()
            return response.json()

    async def fetch(self, kind: OverlayKind, bbox: BoundingBox) -> Dict[str, Any]:
        """
        Fetch features for ``kind`` inside ``bbox``.

        Retries on 5xx responses and transport errors; 4xx responses fail
        immediately.

        Raises:
            OverlayFetchFailed: After the last failed attempt
        """
        key = self._cache_key(kind, bbox)
        if self.use_cache and key in self._cache:
            return self._cache[key]

        try:
            query = build_overpass_query(kind, bbox, timeout_sec=int(self.timeout_sec))
        except ValueError as exc:
            raise OverlayFetchFailed(kind, str(exc)) from exc

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                payload = await self._post(query)
            except httpx.HTTPStatusError as exc:
                last_error = exc
                if exc.response.status_code < 500:
                    break
            except (httpx.TransportError, ValueError) as exc:
                last_error = exc
            else:
                collection = overpass_to_feature_collection(payload, kind)
                if self.use_cache:
                    self._cache[key] = collection
                logger.debug(
                    "Fetched %d %s features from Overpass", len(collection["features"]), kind.value
                )
                return collection

            if attempt < self.max_retries - 1:
                sleep_time = exponential_backoff_with_jitter(attempt)
                logger.warning(
                    "Overpass request for %s failed (attempt %d/%d): %s; retrying in %.1fs",
                    kind.value, attempt + 1, self.max_retries, last_error, sleep_time,
                )
                await asyncio.sleep(sleep_time)

        raise OverlayFetchFailed(kind, str(last_error)) from last_error

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_stats(self) -> Dict[str, Any]:
        return {
            "size": len(self._cache),
            "maxsize": self._cache.maxsize,
            "ttl": CACHE_TTL_SEC,
        }


__all__ = [
    "DEFAULT_OVERPASS_URL",
    "OVERPASS_FILTERS",
    "OverpassOverlayProvider",
    "build_overpass_query",
    "element_to_feature",
    "exponential_backoff_with_jitter",
    "overpass_to_feature_collection",
]
