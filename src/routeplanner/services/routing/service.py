"""Routing orchestration service."""

from __future__ import annotations

import numpy as np

from ...config import settings
from ...models.domain import Location, Route
from ...persistence.filesystem import RoutePlanStore
from ...schemas.routing import (
    LocationModel,
    RouteDistanceRequest,
    RouteDistanceResponse,
    RouteModel,
    RouteStopModel,
    RoutingRequest,
    RoutingResponse,
)
from ..export.geojson import export_routes_to_geojson
from ..export.navigation import apple_maps_url, exceeds_waypoint_limit, google_maps_url
from ..optimization.assembler import RoutePlanResult, calculate_route_distance, plan_routes
from ..outputs.routing_formatter import routing_result_to_csv, routing_result_to_json


def _location_model(route_location: Location) -> LocationModel:
    return LocationModel(
        latitude=route_location.latitude,
        longitude=route_location.longitude,
        label=route_location.label,
    )


def _route_model(route: Route) -> RouteModel:
    return RouteModel(
        route_id=route.route_id,
        color=route.color,
        stop_count=route.stop_count,
        total_distance_miles=calculate_route_distance(route),
        exceeds_waypoint_limit=exceeds_waypoint_limit(route),
        google_maps_url=google_maps_url(route),
        apple_maps_url=apple_maps_url(route),
        start_location=_location_model(route.start_location),
        end_location=_location_model(route.end_location),
        stops=[
            RouteStopModel(
                sequence=sequence,
                stop_id=stop.stop_id,
                name=stop.name,
                address=stop.full_address,
                latitude=stop.coordinate.latitude,
                longitude=stop.coordinate.longitude,
            )
            for sequence, stop in enumerate(route.stops, start=1)
        ],
    )


def run_plan(payload: RoutingRequest) -> RoutePlanResult:
    stops = [stop.to_domain() for stop in payload.stops]
    start_location = payload.start_location.to_domain() if payload.start_location else None
    end_location = None
    if not payload.return_to_start and payload.end_location is not None:
        end_location = payload.end_location.to_domain()

    seed = payload.seed if payload.seed is not None else settings.random_seed
    return plan_routes(
        stops,
        payload.number_of_routes,
        start_location,
        end_location,
        rng=np.random.default_rng(seed),
    )


def _persist_outputs(result: RoutePlanResult, response: RoutingResponse) -> str:
    plan_dir = RoutePlanStore().save(
        summary={**routing_result_to_json(result), "metadata": response.metadata},
        routes_csv=routing_result_to_csv(result),
        geojson=export_routes_to_geojson(result.routes),
    )
    return str(plan_dir)


def optimize_routes(payload: RoutingRequest) -> RoutingResponse:
    result = run_plan(payload)
    routes = [_route_model(route) for route in result.routes]

    metadata = {
        "requested_routes": payload.number_of_routes,
        "route_count": len(routes),
        "total_stops": len(payload.stops),
        "routed_stops": sum(route.stop_count for route in routes),
        "excluded_stops": len(result.excluded_stops),
        "total_distance_miles": sum(route.total_distance_miles for route in routes),
        "converged": result.converged,
        "iterations": result.iterations,
        "max_navigation_waypoints": settings.max_navigation_waypoints,
    }
    response = RoutingResponse(
        routes=routes,
        excluded_stop_ids=[stop.stop_id for stop in result.excluded_stops],
        metadata=metadata,
    )

    if payload.persist and result.routes:
        response.metadata["output_dir"] = _persist_outputs(result, response)

    return response


def compute_route_distance(payload: RouteDistanceRequest) -> RouteDistanceResponse:
    route = Route(
        route_id=1,
        color=settings.route_colors[0],
        stops=tuple(stop.to_domain() for stop in payload.stops),
        start_location=payload.start_location.to_domain(),
        end_location=payload.end_location.to_domain(),
    )
    return RouteDistanceResponse(
        stop_count=route.stop_count,
        total_distance_miles=calculate_route_distance(route),
    )


def export_geojson(payload: RoutingRequest) -> dict:
    return export_routes_to_geojson(run_plan(payload).routes)
