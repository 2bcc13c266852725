"""Geocoding endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...models.domain import Coordinate
from ...schemas.geocoding import (
    GeocodeRequest,
    GeocodeResponse,
    ResolveStopsRequest,
    ResolveStopsResponse,
    ReverseGeocodeRequest,
    ReverseGeocodeResponse,
)
from ...schemas.routing import StopModel
from ...services.geocoding.nominatim import NominatimClient, resolve_stops

router = APIRouter(prefix="/geocode", tags=["geocoding"])


def get_geocoder() -> NominatimClient:
    return NominatimClient()


@router.post("", response_model=GeocodeResponse, status_code=status.HTTP_200_OK)
def geocode(payload: GeocodeRequest) -> GeocodeResponse:
    result = get_geocoder().geocode(payload.address, payload.city, payload.state, payload.postal_code)
    if result is None:
        return GeocodeResponse(found=False)
    return GeocodeResponse(
        found=True,
        latitude=result.latitude,
        longitude=result.longitude,
        display_name=result.display_name,
    )


@router.post("/reverse", response_model=ReverseGeocodeResponse, status_code=status.HTTP_200_OK)
def reverse_geocode(payload: ReverseGeocodeRequest) -> ReverseGeocodeResponse:
    display_name = get_geocoder().reverse_geocode(Coordinate(payload.latitude, payload.longitude))
    return ReverseGeocodeResponse(found=display_name is not None, display_name=display_name)


@router.post("/stops", response_model=ResolveStopsResponse, status_code=status.HTTP_200_OK)
def geocode_stops(payload: ResolveStopsRequest) -> ResolveStopsResponse:
    """Resolve coordinates for stops that have none. Slow for large batches (rate limited)."""
    resolved = resolve_stops([stop.to_domain() for stop in payload.stops], client=get_geocoder())
    return ResolveStopsResponse(
        stops=[StopModel.from_domain(stop) for stop in resolved],
        unresolved_stop_ids=[stop.stop_id for stop in resolved if not stop.has_coordinate],
    )
