"""FastAPI server exposing the heritage spatial analysis engine as HTTP actions."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from src.export import export_as_geojson
from src.overlays import (
    EmptyOverlayProvider,
    OverlayFetchFailed,
    OverlayProvider,
    OverpassOverlayProvider,
    get_default_overlays,
)
from src.routing import calculate_route_stats, sequence_route
from src.spatial import (
    ClusteringConfig,
    calculate_spatial_stats,
    cluster_with_diagnostics,
    create_buffer_zones,
    find_sites_in_buffer,
    haversine_m,
)
from src.tools.config_loader import AnalysisSettings, ConfigLoader, OverlaySettings

from .schemas.models import (
    BufferZoneModel,
    BufferZonesRequest,
    BufferZonesResponse,
    ClusteringDiagnosticsModel,
    ClusterModel,
    ClustersRequest,
    ClustersResponse,
    DistanceRequest,
    DistanceResponse,
    LatLng,
    OverlayModel,
    OverlaysResponse,
    RoutePointModel,
    RouteRequest,
    RouteResponse,
    RouteStatsRequest,
    RouteStatsResponse,
    SiteModel,
    SitesInBufferRequest,
    SitesRequest,
    SitesResponse,
    SpatialStatsResponse,
)

load_dotenv()

logger = logging.getLogger(__name__)

app = FastAPI(title="Heritage Spatial Analysis Server", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _load_settings(name: Optional[str] = None) -> AnalysisSettings:
    try:
        return ConfigLoader.load_settings(name)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@lru_cache(maxsize=8)
def _overpass_provider(url: Optional[str], timeout_sec: float) -> OverpassOverlayProvider:
    if url:
        return OverpassOverlayProvider(url, timeout_sec=timeout_sec)
    return OverpassOverlayProvider(timeout_sec=timeout_sec)


def get_overlay_provider(settings: OverlaySettings) -> OverlayProvider:
    """Pick the overlay provider configured for a profile."""
    if settings.provider == "overpass":
        return _overpass_provider(settings.overpass_url, settings.timeout_sec)
    return EmptyOverlayProvider()


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/actions/distance")
async def distance_action(request: DistanceRequest) -> Dict[str, Any]:
    distance = haversine_m(request.point_a.to_point(), request.point_b.to_point())
    return DistanceResponse(distance_m=distance).model_dump(by_alias=True)


@app.post("/actions/buffer_zones")
async def buffer_zones_action(request: BufferZonesRequest) -> Dict[str, Any]:
    radius = request.radius_m
    if radius is None:
        radius = _load_settings().buffer_radius_m

    zones = create_buffer_zones([s.to_site() for s in request.sites], radius)
    response = BufferZonesResponse(zones=[BufferZoneModel.from_zone(z) for z in zones])
    return response.model_dump(by_alias=True)


@app.post("/actions/sites_in_buffer")
async def sites_in_buffer_action(request: SitesInBufferRequest) -> Dict[str, Any]:
    sites = find_sites_in_buffer(
        request.center.to_point(),
        [s.to_site() for s in request.sites],
        request.radius_m,
    )
    response = SitesResponse(sites=[SiteModel.from_site(s) for s in sites])
    return response.model_dump(by_alias=True)


@app.post("/actions/route")
async def route_action(request: RouteRequest) -> Dict[str, Any]:
    result = sequence_route([p.to_route_point() for p in request.points])
    response = RouteResponse(
        route=[LatLng.from_point(point) for point in result.route],
        stops=[
            RoutePointModel(
                lat=p.point.lat, lng=p.point.lng, name=p.name, description=p.description
            )
            for p in result.points
        ],
        leg_distances_m=result.leg_distances_m,
        total_distance_m=result.total_distance_m,
        sequence_method=result.sequence_method,
    )
    return response.model_dump(by_alias=True)


@app.post("/actions/clusters")
async def clusters_action(request: ClustersRequest) -> Dict[str, Any]:
    threshold = request.threshold_m
    if threshold is None:
        threshold = _load_settings().cluster_threshold_m

    clusters, diagnostics = cluster_with_diagnostics(
        [s.to_site() for s in request.sites],
        ClusteringConfig(threshold_m=threshold),
    )
    response = ClustersResponse(
        clusters=[ClusterModel.from_cluster(c) for c in clusters],
        diagnostics=ClusteringDiagnosticsModel(
            num_points=diagnostics.num_points,
            num_clusters=diagnostics.num_clusters,
            num_unclustered=diagnostics.num_unclustered,
            threshold_m=diagnostics.threshold_m,
            cluster_sizes=diagnostics.cluster_sizes,
            suggestions=diagnostics.suggestions,
        ),
    )
    return response.model_dump(by_alias=True)


@app.post("/actions/spatial_stats")
async def spatial_stats_action(request: SitesRequest) -> Dict[str, Any]:
    threshold = _load_settings().cluster_threshold_m
    stats = calculate_spatial_stats([s.to_site() for s in request.sites], threshold)
    response = SpatialStatsResponse(
        total_sites=stats.total_sites,
        average_distance=stats.average_distance_m,
        density=stats.density_per_km2,
        clusters=[ClusterModel.from_cluster(c) for c in stats.clusters],
    )
    return response.model_dump(by_alias=True)


@app.post("/actions/export_geojson")
async def export_geojson_action(request: SitesRequest) -> Dict[str, Any]:
    return export_as_geojson([s.to_site() for s in request.sites])


@app.post("/actions/route_stats")
async def route_stats_action(request: RouteStatsRequest) -> Dict[str, Any]:
    stats = calculate_route_stats([stop.to_route_stop() for stop in request.stops])
    return RouteStatsResponse(**stats.to_dict()).model_dump(by_alias=True)


@app.get("/actions/overlays")
async def overlays_action(profile: Optional[str] = None) -> Dict[str, Any]:
    settings = _load_settings(profile).overlays
    provider = get_overlay_provider(settings)

    try:
        overlays = await get_default_overlays(settings.bbox, provider)
    except OverlayFetchFailed as exc:
        logger.error("Overlay fetch failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    response = OverlaysResponse(overlays=[OverlayModel(**o.to_dict()) for o in overlays])
    return response.model_dump()
