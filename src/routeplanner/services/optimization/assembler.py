"""Route assembly: cluster valid stops, sequence each cluster, package routes."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ...config import settings
from ...models.domain import Location, Route, Stop
from ..geospatial import distance_between
from .clustering import CentroidClustering
from .sequencing import nearest_neighbor_order

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoutePlanResult:
    routes: List[Route]
    excluded_stops: List[Stop]
    converged: bool
    iterations: int


def _validate_route_count(number_of_routes: int) -> None:
    if isinstance(number_of_routes, bool) or not isinstance(number_of_routes, (int, np.integer)):
        raise ValueError(f"number_of_routes must be an integer, got {number_of_routes!r}")
    if number_of_routes < 1:
        raise ValueError(f"number_of_routes must be >= 1, got {number_of_routes}")


def _validate_location(location: Location | None, role: str) -> Location:
    if location is None:
        raise ValueError(f"{role} location is required to build routes.")
    if location.coordinate is None or not location.coordinate.is_valid:
        raise ValueError(f"{role} location has an invalid coordinate: {location.coordinate!r}")
    return location


def _sequence_clusters(
    clusters: Sequence[Sequence[Stop]],
    start_location: Location,
    max_workers: int,
) -> list[list[Stop]]:
    if max_workers <= 1 or len(clusters) <= 1:
        return [nearest_neighbor_order(cluster, start_location) for cluster in clusters]

    # map() yields in submission order, so route numbering stays deterministic
    with ThreadPoolExecutor(max_workers=min(max_workers, len(clusters))) as executor:
        return list(executor.map(lambda cluster: nearest_neighbor_order(cluster, start_location), clusters))


def plan_routes(
    stops: Sequence[Stop],
    number_of_routes: int,
    start_location: Location | None,
    end_location: Location | None = None,
    *,
    rng: np.random.Generator | None = None,
    palette: Sequence[str] | None = None,
    max_workers: int | None = None,
) -> RoutePlanResult:
    """Split ``stops`` into at most ``number_of_routes`` ordered routes.

    Stops without a usable coordinate are excluded and reported in
    ``excluded_stops``. A missing ``end_location`` means the routes return to
    the start. Raises ``ValueError`` for a non-positive route count or an
    invalid start/end location when there is anything to route.
    """
    _validate_route_count(number_of_routes)
    palette = tuple(palette or settings.route_colors)

    valid_stops = [stop for stop in stops if stop.has_coordinate]
    excluded_stops = [stop for stop in stops if not stop.has_coordinate]

    if not valid_stops:
        logger.info("No stops with coordinates (%d excluded); returning no routes", len(excluded_stops))
        return RoutePlanResult(routes=[], excluded_stops=excluded_stops, converged=True, iterations=0)

    start_location = _validate_location(start_location, "Start")
    end_location = start_location if end_location is None else _validate_location(end_location, "End")

    clustering = CentroidClustering(rng=rng)
    result = clustering.cluster(valid_stops, number_of_routes)

    workers = max_workers if max_workers is not None else settings.sequencing_workers
    ordered_groups = _sequence_clusters(result.clusters, start_location, workers)

    routes = [
        Route(
            route_id=index + 1,
            color=palette[index % len(palette)],
            stops=tuple(ordered),
            start_location=start_location,
            end_location=end_location,
        )
        for index, ordered in enumerate(ordered_groups)
    ]

    logger.info(
        "Planned %d routes for %d stops (%d excluded, requested %d, converged=%s after %d iterations)",
        len(routes),
        len(valid_stops),
        len(excluded_stops),
        number_of_routes,
        result.converged,
        result.iterations,
    )
    return RoutePlanResult(
        routes=routes,
        excluded_stops=excluded_stops,
        converged=result.converged,
        iterations=result.iterations,
    )


def optimize_routes(
    stops: Sequence[Stop],
    number_of_routes: int,
    start_location: Location | None,
    end_location: Location | None = None,
    *,
    rng: np.random.Generator | None = None,
) -> list[Route]:
    return plan_routes(stops, number_of_routes, start_location, end_location, rng=rng).routes


def calculate_route_distance(route: Route) -> float:
    """Total miles: start to first stop, stop to stop, last stop to end."""
    if not route.stops:
        return 0.0

    waypoints = [
        route.start_location.coordinate,
        *(stop.coordinate if stop.has_coordinate else None for stop in route.stops),
        route.end_location.coordinate,
    ]
    # legs touching an unresolved stop are not charged
    return sum(
        distance_between(origin, destination)
        for origin, destination in zip(waypoints, waypoints[1:])
        if origin is not None and destination is not None
    )
