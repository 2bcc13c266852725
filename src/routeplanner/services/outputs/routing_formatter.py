"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io

from ..optimization.assembler import RoutePlanResult, calculate_route_distance


def routing_result_to_json(result: RoutePlanResult) -> dict:
    return {
        "converged": result.converged,
        "iterations": result.iterations,
        "excluded_stop_ids": [stop.stop_id for stop in result.excluded_stops],
        "routes": [
            {
                "route_id": route.route_id,
                "color": route.color,
                "stop_count": route.stop_count,
                "total_distance_miles": calculate_route_distance(route),
                "start_location": {
                    "latitude": route.start_location.latitude,
                    "longitude": route.start_location.longitude,
                    "label": route.start_location.label,
                },
                "end_location": {
                    "latitude": route.end_location.latitude,
                    "longitude": route.end_location.longitude,
                    "label": route.end_location.label,
                },
                "stops": [
                    {
                        "sequence": sequence,
                        "stop_id": stop.stop_id,
                        "name": stop.name,
                        "address": stop.full_address,
                        "latitude": stop.coordinate.latitude,
                        "longitude": stop.coordinate.longitude,
                    }
                    for sequence, stop in enumerate(route.stops, start=1)
                ],
            }
            for route in result.routes
        ],
    }


def routing_result_to_csv(result: RoutePlanResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "route_id",
        "color",
        "sequence",
        "stop_id",
        "name",
        "address",
        "latitude",
        "longitude",
        "total_distance_miles",
        "stop_count",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for route in result.routes:
        total_distance = calculate_route_distance(route)
        for sequence, stop in enumerate(route.stops, start=1):
            writer.writerow(
                {
                    "route_id": route.route_id,
                    "color": route.color,
                    "sequence": sequence,
                    "stop_id": stop.stop_id,
                    "name": stop.name,
                    "address": stop.full_address,
                    "latitude": stop.coordinate.latitude,
                    "longitude": stop.coordinate.longitude,
                    "total_distance_miles": total_distance,
                    "stop_count": route.stop_count,
                }
            )
    return buffer.getvalue()
