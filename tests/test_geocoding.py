import httpx
import pytest

from routeplanner.models.domain import Coordinate, Stop
from routeplanner.services.geocoding import nominatim
from routeplanner.services.geocoding.nominatim import NominatimClient, resolve_stops


def _client(handler) -> NominatimClient:
    return NominatimClient(
        base_url="https://geo.test",
        max_retries=1,
        backoff_seconds=0.0,
        rate_limit_seconds=0.0,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_geocode_returns_first_match():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"lat": "39.9167", "lon": "-75.3877", "display_name": "Media, PA"}])

    result = _client(handler).geocode("1 Main St", "Media", "PA", "19063")

    assert result is not None
    assert result.coordinate == Coordinate(39.9167, -75.3877)
    assert result.display_name == "Media, PA"
    assert seen[0].url.path == "/search"
    assert seen[0].url.params["q"] == "1 Main St, Media, PA 19063"
    assert seen[0].headers["User-Agent"]


def test_geocode_without_match_returns_none():
    result = _client(lambda request: httpx.Response(200, json=[])).geocode("Nowhere")
    assert result is None


def test_geocode_retries_server_errors_then_gives_up():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    assert _client(handler).geocode("1 Main St") is None
    assert len(calls) == 2


def test_geocode_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400)

    assert _client(handler).geocode("1 Main St") is None
    assert len(calls) == 1


def test_geocode_recovers_after_network_error():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=[{"lat": "40.0", "lon": "-75.0", "display_name": "Somewhere"}])

    result = _client(handler).geocode("1 Main St")

    assert result is not None
    assert len(calls) == 2


def test_reverse_geocode():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/reverse"
        return httpx.Response(200, json={"display_name": "1 Main St, Media, PA"})

    assert _client(handler).reverse_geocode(Coordinate(39.9, -75.4)) == "1 Main St, Media, PA"


def test_batch_geocode_reports_progress():
    progress = []
    client = _client(lambda request: httpx.Response(200, json=[{"lat": "1", "lon": "2"}]))

    results = client.batch_geocode(
        [("1 A St", "X", "PA", "1"), ("2 B St", "Y", "PA", "2")],
        on_progress=lambda done, total: progress.append((done, total)),
    )

    assert len(results) == 2
    assert progress == [(1, 2), (2, 2)]


def test_resolve_stops_only_queries_unresolved_addresses():
    queries = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = request.url.params["q"]
        queries.append(query)
        if query.startswith("Unknown"):
            return httpx.Response(200, json=[])
        return httpx.Response(200, json=[{"lat": "40.5", "lon": "-75.5", "display_name": query}])

    stops = [
        Stop(stop_id="A", address="1 Known Rd", city="Media", state="PA", postal_code="19063"),
        Stop(stop_id="B", address="2 Done Rd", coordinate=Coordinate(40.0, -75.0)),
        Stop(stop_id="C", address="Unknown Rd", city="Media", state="PA", postal_code="19063"),
    ]

    resolved = resolve_stops(stops, client=_client(handler))

    assert len(queries) == 2
    assert [stop.stop_id for stop in resolved] == ["A", "B", "C"]
    assert resolved[0].coordinate == Coordinate(40.5, -75.5)
    assert resolved[1] is stops[1]
    assert resolved[2].coordinate is None
    assert stops[0].coordinate is None


@pytest.mark.parametrize("failure", ["status", "timeout"])
def test_retries_back_off_exponentially(failure, monkeypatch: pytest.MonkeyPatch):
    waits = []
    calls = []
    monkeypatch.setattr(nominatim.time, "sleep", waits.append)

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) <= 3:
            if failure == "timeout":
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(429 if len(calls) == 1 else 503)
        return httpx.Response(200, json=[{"lat": "40.0", "lon": "-75.0", "display_name": "Somewhere"}])

    client = NominatimClient(
        base_url="https://geo.test",
        max_retries=3,
        backoff_seconds=0.5,
        rate_limit_seconds=0.0,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    assert client.geocode("1 Main St") is not None
    assert len(calls) == 4
    assert waits == [0.5, 1.0, 2.0]
