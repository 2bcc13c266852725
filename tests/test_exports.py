from routeplanner.models.domain import Coordinate, Location, Route, Stop
from routeplanner.services.export.geojson import export_routes_to_geojson
from routeplanner.services.export.navigation import (
    apple_maps_url,
    exceeds_waypoint_limit,
    google_maps_url,
)
from routeplanner.services.optimization.assembler import RoutePlanResult
from routeplanner.services.outputs.routing_formatter import routing_result_to_csv, routing_result_to_json


def _stop(sid: str, lat: float, lon: float) -> Stop:
    return Stop(
        stop_id=sid,
        name=f"Customer {sid}",
        address="12 Candy Cane Ct",
        city="Media",
        state="PA",
        postal_code="19063",
        coordinate=Coordinate(lat, lon),
    )


def _route(stop_count: int, route_id: int = 1) -> Route:
    stops = tuple(_stop(f"S{i}", 40.0 + i * 0.01, -75.0) for i in range(stop_count))
    return Route(
        route_id=route_id,
        color="#3b82f6",
        stops=stops,
        start_location=Location(Coordinate(39.5, -75.5), label="Shop"),
        end_location=Location(Coordinate(39.6, -75.6), label="Home"),
    )


def test_google_maps_url_lists_start_stops_and_end():
    route = _route(2)

    url = google_maps_url(route)

    assert url == "https://www.google.com/maps/dir/39.5,-75.5/40.0,-75.0/40.01,-75.0/39.6,-75.6"


def test_google_maps_url_caps_waypoints_without_touching_route():
    route = _route(12)

    url = google_maps_url(route, max_waypoints=10)
    segments = url.removeprefix("https://www.google.com/maps/dir/").split("/")

    assert len(segments) == 12
    assert segments[-1] == "39.6,-75.6"
    assert route.stop_count == 12


def test_waypoint_limit_flag():
    assert not exceeds_waypoint_limit(_route(10), limit=10)
    assert exceeds_waypoint_limit(_route(11), limit=10)


def test_apple_maps_url_chains_destinations():
    url = apple_maps_url(_route(2))

    assert url == "maps://?saddr=39.5,-75.5&daddr=40.0,-75.0+to:40.01,-75.0+to:39.6,-75.6"


def test_geojson_has_line_and_stop_points():
    routes = [_route(3, route_id=1), _route(2, route_id=2)]

    collection = export_routes_to_geojson(routes)

    assert collection["type"] == "FeatureCollection"
    lines = [f for f in collection["features"] if f["properties"]["kind"] == "route"]
    points = [f for f in collection["features"] if f["properties"]["kind"] == "stop"]
    assert len(lines) == 2
    assert len(points) == 5

    first_line = lines[0]
    assert first_line["geometry"]["type"] == "LineString"
    assert len(first_line["geometry"]["coordinates"]) == 5
    # GeoJSON positions are lon, lat
    assert tuple(first_line["geometry"]["coordinates"][0]) == (-75.5, 39.5)
    assert first_line["properties"]["total_distance_miles"] > 0
    assert [p["properties"]["sequence"] for p in points[:3]] == [1, 2, 3]


def test_routing_result_serializers():
    result = RoutePlanResult(
        routes=[_route(2, route_id=1), _route(1, route_id=2)],
        excluded_stops=[Stop(stop_id="MISSING")],
        converged=True,
        iterations=3,
    )

    payload = routing_result_to_json(result)
    assert payload["excluded_stop_ids"] == ["MISSING"]
    assert [route["stop_count"] for route in payload["routes"]] == [2, 1]
    assert payload["routes"][0]["stops"][1]["sequence"] == 2

    csv_text = routing_result_to_csv(result)
    lines = csv_text.strip().splitlines()
    assert lines[0].startswith("route_id,color,sequence,stop_id")
    assert len(lines) == 4
