"""Export services."""

from .geojson import export_routes_to_geojson
from .navigation import apple_maps_url, exceeds_waypoint_limit, google_maps_url

__all__ = [
    "export_routes_to_geojson",
    "google_maps_url",
    "apple_maps_url",
    "exceeds_waypoint_limit",
]
