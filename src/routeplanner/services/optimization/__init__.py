"""Route optimization engine."""

from .assembler import RoutePlanResult, calculate_route_distance, optimize_routes, plan_routes
from .clustering import CentroidClustering, ClusteringResult
from .sequencing import nearest_neighbor_order

__all__ = [
    "CentroidClustering",
    "ClusteringResult",
    "RoutePlanResult",
    "calculate_route_distance",
    "nearest_neighbor_order",
    "optimize_routes",
    "plan_routes",
]
