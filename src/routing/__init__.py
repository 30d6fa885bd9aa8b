"""Route construction and route statistics."""

from .nearest_neighbor import (
    RoutePoint,
    RouteSequenceResult,
    generate_route,
    route_length_m,
    sequence_route,
)

from .route_stats import (
    DEFAULT_VISIT_DURATION_MIN,
    RouteStats,
    RouteStop,
    calculate_route_stats,
    round_half_up,
)

__all__ = [
    # Nearest-neighbour routing
    "RoutePoint",
    "RouteSequenceResult",
    "generate_route",
    "route_length_m",
    "sequence_route",

    # Curated route statistics
    "DEFAULT_VISIT_DURATION_MIN",
    "RouteStats",
    "RouteStop",
    "calculate_route_stats",
    "round_half_up",
]
