"""
src/spatial: Geodesy, buffer zones, proximity, clustering and statistics.

All functions are synchronous and pure: they take an in-memory site list
and return freshly built results. Sites without coordinates are filtered
out silently.
"""

from .geodesy import (
    ABSENT,
    Absent,
    Coordinates,
    EARTH_RADIUS_M,
    GeoPoint,
    Present,
    coordinates_from,
    haversine_m,
    haversine_many,
)
from .models import (
    BufferZone,
    Cluster,
    Site,
    SpatialStats,
)
from .buffers import (
    DEFAULT_BUFFER_RADIUS_M,
    create_buffer_zones,
    find_sites_in_buffer,
)
from .clustering import (
    ClusteringConfig,
    ClusteringDiagnostics,
    DEFAULT_CLUSTER_THRESHOLD_M,
    cluster_with_diagnostics,
    identify_clusters,
)
from .stats import calculate_spatial_stats, compute_centroid

__all__ = [
    # Geodesy
    "ABSENT",
    "Absent",
    "Coordinates",
    "EARTH_RADIUS_M",
    "GeoPoint",
    "Present",
    "coordinates_from",
    "haversine_m",
    "haversine_many",

    # Data models
    "BufferZone",
    "Cluster",
    "Site",
    "SpatialStats",

    # Buffers and proximity
    "DEFAULT_BUFFER_RADIUS_M",
    "create_buffer_zones",
    "find_sites_in_buffer",

    # Clustering
    "ClusteringConfig",
    "ClusteringDiagnostics",
    "DEFAULT_CLUSTER_THRESHOLD_M",
    "cluster_with_diagnostics",
    "identify_clusters",

    # Statistics
    "calculate_spatial_stats",
    "compute_centroid",
]
