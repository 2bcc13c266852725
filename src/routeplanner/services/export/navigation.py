"""Turn-by-turn navigation links for planned routes."""

from __future__ import annotations

from ...config import settings
from ...models.domain import Coordinate, Route

GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


def _format_coordinate(coordinate: Coordinate) -> str:
    return f"{coordinate.latitude},{coordinate.longitude}"


def exceeds_waypoint_limit(route: Route, limit: int | None = None) -> bool:
    """True when a navigation link would drop some of the route's stops."""
    limit = limit if limit is not None else settings.max_navigation_waypoints
    return route.stop_count > limit


def google_maps_url(route: Route, max_waypoints: int | None = None) -> str:
    """Build a Google Maps directions URL: start, up to ``max_waypoints`` stops, end."""
    max_waypoints = max_waypoints if max_waypoints is not None else settings.max_navigation_waypoints

    waypoints = [_format_coordinate(route.start_location.coordinate)]
    for stop in route.stops[:max_waypoints]:
        if stop.has_coordinate:
            waypoints.append(_format_coordinate(stop.coordinate))
    waypoints.append(_format_coordinate(route.end_location.coordinate))

    return GOOGLE_MAPS_DIRECTIONS_URL + "/".join(waypoints)


def apple_maps_url(route: Route) -> str:
    """Build an Apple Maps URL with every stop chained as ``+to:`` destinations."""
    destinations = [_format_coordinate(stop.coordinate) for stop in route.stops if stop.has_coordinate]
    destinations.append(_format_coordinate(route.end_location.coordinate))

    saddr = _format_coordinate(route.start_location.coordinate)
    daddr = "+to:".join(destinations)
    return f"maps://?saddr={saddr}&daddr={daddr}"
