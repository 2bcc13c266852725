from routeplanner.models.domain import Coordinate, Location, Stop
from routeplanner.services.optimization.sequencing import nearest_neighbor_order


def _stop(sid: str, lat: float | None, lon: float | None) -> Stop:
    coordinate = Coordinate(lat, lon) if lat is not None and lon is not None else None
    return Stop(stop_id=sid, name=f"Customer {sid}", coordinate=coordinate)


def _start(lat: float, lon: float) -> Location:
    return Location(coordinate=Coordinate(lat, lon), label="Shop")


def test_empty_cluster_returns_empty_sequence():
    assert nearest_neighbor_order([], _start(0.0, 0.0)) == []


def test_single_stop_returned_as_is():
    stop = _stop("A", 1.0, 1.0)
    assert nearest_neighbor_order([stop], _start(0.0, 0.0)) == [stop]


def test_visits_collinear_stops_outward_from_start():
    far = _stop("FAR", 0.0, 0.3)
    near = _stop("NEAR", 0.0, 0.1)
    middle = _stop("MID", 0.0, 0.2)

    ordered = nearest_neighbor_order([far, near, middle], _start(0.0, 0.0))

    assert [stop.stop_id for stop in ordered] == ["NEAR", "MID", "FAR"]


def test_greedy_choice_follows_current_position():
    # From B the nearest unvisited stop is C, not the stop closest to the start
    a = _stop("A", 0.0, 1.0)
    b = _stop("B", 0.0, -0.5)
    c = _stop("C", 0.0, -1.2)

    ordered = nearest_neighbor_order([a, b, c], _start(0.0, 0.0))

    assert [stop.stop_id for stop in ordered] == ["B", "C", "A"]


def test_ties_keep_input_order():
    east = _stop("EAST", 0.0, 1.0)
    west = _stop("WEST", 0.0, -1.0)

    assert [s.stop_id for s in nearest_neighbor_order([east, west], _start(0.0, 0.0))] == ["EAST", "WEST"]
    assert [s.stop_id for s in nearest_neighbor_order([west, east], _start(0.0, 0.0))] == ["WEST", "EAST"]


def test_stops_without_coordinates_are_skipped():
    located = [_stop("A", 0.0, 0.2), _stop("B", 0.0, 0.1)]
    missing = _stop("MISSING", None, None)

    ordered = nearest_neighbor_order([located[0], missing, located[1]], _start(0.0, 0.0))

    assert [stop.stop_id for stop in ordered] == ["B", "A"]


def test_order_is_deterministic():
    stops = [_stop(f"S{i}", 40.0 + i * 0.013, -75.0 - (i % 3) * 0.021) for i in range(12)]
    start = _start(40.05, -75.02)

    assert nearest_neighbor_order(stops, start) == nearest_neighbor_order(stops, start)
