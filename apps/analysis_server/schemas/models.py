"""Pydantic models for the heritage spatial analysis HTTP server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.routing import RoutePoint as EngineRoutePoint
from src.routing import RouteStop as EngineRouteStop
from src.spatial import BufferZone, Cluster, GeoPoint, Site, coordinates_from


class LatLng(BaseModel):
    """Simple latitude/longitude container."""

    lat: float = Field(..., description="Latitude in decimal degrees")
    lng: float = Field(..., description="Longitude in decimal degrees")

    def to_point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)

    @classmethod
    def from_point(cls, point: GeoPoint) -> "LatLng":
        return cls(lat=point.lat, lng=point.lng)


class SiteModel(BaseModel):
    """Site record as exchanged with the catalog front end."""

    id: str
    name: Optional[str] = None
    local_name: Optional[str] = Field(default=None, alias="localName")
    category_name: Optional[str] = Field(default=None, alias="categoryName")
    category_color: Optional[str] = Field(default=None, alias="categoryColor")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    significance_score: Optional[float] = Field(default=None, alias="significanceScore")
    preservation_status: Optional[str] = Field(default=None, alias="preservationStatus")

    model_config = {"populate_by_name": True}

    def to_site(self) -> Site:
        return Site(
            id=self.id,
            name=self.name,
            local_name=self.local_name,
            category_name=self.category_name,
            category_color=self.category_color,
            coordinates=coordinates_from(self.latitude, self.longitude),
            significance_score=self.significance_score,
            preservation_status=self.preservation_status,
        )

    @classmethod
    def from_site(cls, site: Site) -> "SiteModel":
        return cls(
            id=site.id,
            name=site.name,
            local_name=site.local_name,
            category_name=site.category_name,
            category_color=site.category_color,
            latitude=site.latitude,
            longitude=site.longitude,
            significance_score=site.significance_score,
            preservation_status=site.preservation_status,
        )


class DistanceRequest(BaseModel):
    point_a: LatLng = Field(..., alias="pointA")
    point_b: LatLng = Field(..., alias="pointB")

    model_config = {"populate_by_name": True}


class DistanceResponse(BaseModel):
    distance_m: float = Field(..., alias="distanceM")

    model_config = {"populate_by_name": True}


class BufferZonesRequest(BaseModel):
    sites: List[SiteModel]
    radius_m: Optional[float] = Field(
        default=None, alias="radiusM", description="Defaults to the profile radius"
    )

    model_config = {"populate_by_name": True}


class BufferZoneModel(BaseModel):
    center: LatLng
    radius: float
    site_id: str = Field(..., alias="siteId")
    site_name: str = Field(..., alias="siteName")
    color: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_zone(cls, zone: BufferZone) -> "BufferZoneModel":
        return cls(
            center=LatLng.from_point(zone.center),
            radius=zone.radius_m,
            site_id=zone.site_id,
            site_name=zone.site_name,
            color=zone.color,
        )


class BufferZonesResponse(BaseModel):
    zones: List[BufferZoneModel]


class SitesInBufferRequest(BaseModel):
    center: LatLng
    sites: List[SiteModel]
    radius_m: float = Field(..., alias="radiusM")

    model_config = {"populate_by_name": True}


class SitesResponse(BaseModel):
    sites: List[SiteModel]


class RoutePointModel(BaseModel):
    lat: float
    lng: float
    name: str
    description: Optional[str] = None

    def to_route_point(self) -> EngineRoutePoint:
        return EngineRoutePoint(
            point=GeoPoint(self.lat, self.lng),
            name=self.name,
            description=self.description,
        )


class RouteRequest(BaseModel):
    points: List[RoutePointModel]


class RouteResponse(BaseModel):
    route: List[LatLng]
    stops: List[RoutePointModel]
    leg_distances_m: List[float] = Field(default_factory=list, alias="legDistancesM")
    total_distance_m: float = Field(0.0, alias="totalDistanceM")
    sequence_method: str = Field("nearest_neighbor", alias="sequenceMethod")

    model_config = {"populate_by_name": True}


class ClusterModel(BaseModel):
    id: str
    sites: List[SiteModel]
    center: LatLng
    site_count: int = Field(..., alias="siteCount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_cluster(cls, cluster: Cluster) -> "ClusterModel":
        return cls(
            id=cluster.id,
            sites=[SiteModel.from_site(site) for site in cluster.members],
            center=LatLng.from_point(cluster.center),
            site_count=cluster.site_count,
        )


class ClustersRequest(BaseModel):
    sites: List[SiteModel]
    threshold_m: Optional[float] = Field(
        default=None, alias="thresholdM", description="Defaults to the profile threshold"
    )

    model_config = {"populate_by_name": True}


class ClusteringDiagnosticsModel(BaseModel):
    num_points: int = Field(..., alias="numPoints")
    num_clusters: int = Field(..., alias="numClusters")
    num_unclustered: int = Field(..., alias="numUnclustered")
    threshold_m: float = Field(..., alias="thresholdM")
    cluster_sizes: List[int] = Field(default_factory=list, alias="clusterSizes")
    suggestions: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class ClustersResponse(BaseModel):
    clusters: List[ClusterModel]
    diagnostics: ClusteringDiagnosticsModel


class SitesRequest(BaseModel):
    sites: List[SiteModel]


class SpatialStatsResponse(BaseModel):
    total_sites: int = Field(..., alias="totalSites")
    average_distance: float = Field(..., alias="averageDistance")
    density: float
    clusters: List[ClusterModel]

    model_config = {"populate_by_name": True}


class RouteStopModel(BaseModel):
    site: SiteModel
    visit_duration_minutes: Optional[int] = Field(
        default=None, ge=0, alias="visitDurationMinutes"
    )

    model_config = {"populate_by_name": True}

    def to_route_stop(self) -> EngineRouteStop:
        return EngineRouteStop(
            site=self.site.to_site(),
            visit_duration_minutes=self.visit_duration_minutes,
        )


class RouteStatsRequest(BaseModel):
    stops: List[RouteStopModel]


class RouteStatsResponse(BaseModel):
    total_sites: int = Field(..., alias="totalSites")
    total_duration: int = Field(..., alias="totalDuration")
    total_distance: float = Field(..., alias="totalDistance")
    average_rating: float = Field(..., alias="averageRating")

    model_config = {"populate_by_name": True}


class OverlayModel(BaseModel):
    id: str
    name: str
    type: str
    data: Dict[str, Any]
    visible: bool
    opacity: float


class OverlaysResponse(BaseModel):
    overlays: List[OverlayModel]
