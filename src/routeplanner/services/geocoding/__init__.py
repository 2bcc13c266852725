"""Address resolution services."""

from .nominatim import GeocodingResult, NominatimClient, resolve_stops

__all__ = ["GeocodingResult", "NominatimClient", "resolve_stops"]
