"""GeoJSON export utilities for planned routes."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from shapely.geometry import LineString, Point, mapping

from ...models.domain import Route
from ..optimization.assembler import calculate_route_distance


def route_path(route: Route) -> List[tuple[float, float]]:
    """Return the route's travel path as ``(lon, lat)`` pairs, start and end included."""
    path = [(route.start_location.longitude, route.start_location.latitude)]
    path.extend(
        (stop.coordinate.longitude, stop.coordinate.latitude)
        for stop in route.stops
        if stop.has_coordinate
    )
    path.append((route.end_location.longitude, route.end_location.latitude))
    return path


def route_to_features(route: Route) -> List[Dict[str, Any]]:
    """Convert one route into a LineString feature followed by one Point per stop."""
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": mapping(LineString(route_path(route))),
            "properties": {
                "kind": "route",
                "route_id": route.route_id,
                "color": route.color,
                "stop_count": route.stop_count,
                "total_distance_miles": round(calculate_route_distance(route), 3),
                "start_label": route.start_location.label,
                "end_label": route.end_location.label,
            },
        }
    ]

    for sequence, stop in enumerate(route.stops, start=1):
        if not stop.has_coordinate:
            continue
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(stop.coordinate.longitude, stop.coordinate.latitude)),
                "properties": {
                    "kind": "stop",
                    "route_id": route.route_id,
                    "color": route.color,
                    "sequence": sequence,
                    "stop_id": stop.stop_id,
                    "name": stop.name,
                    "address": stop.full_address,
                },
            }
        )
    return features


def export_routes_to_geojson(routes: Sequence[Route]) -> Dict[str, Any]:
    """Build a GeoJSON FeatureCollection for a set of planned routes."""
    features: List[Dict[str, Any]] = []
    for route in routes:
        features.extend(route_to_features(route))
    return {"type": "FeatureCollection", "features": features}
