"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..config import settings
from ..models.domain import Coordinate, Location, Stop


class LocationModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    label: Optional[str] = None

    def to_domain(self) -> Location:
        return Location(coordinate=Coordinate(self.latitude, self.longitude), label=self.label)


class StopModel(BaseModel):
    stop_id: str
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    latitude: Optional[float] = Field(default=None, description="Unset when the address has not been resolved.")
    longitude: Optional[float] = None

    def to_domain(self) -> Stop:
        coordinate = None
        if self.latitude is not None and self.longitude is not None:
            coordinate = Coordinate(self.latitude, self.longitude)
        return Stop(
            stop_id=self.stop_id,
            name=self.name,
            address=self.address,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            coordinate=coordinate,
        )

    @classmethod
    def from_domain(cls, stop: Stop) -> "StopModel":
        return cls(
            stop_id=stop.stop_id,
            name=stop.name,
            address=stop.address,
            city=stop.city,
            state=stop.state,
            postal_code=stop.postal_code,
            latitude=stop.coordinate.latitude if stop.coordinate else None,
            longitude=stop.coordinate.longitude if stop.coordinate else None,
        )


class RoutingRequest(BaseModel):
    stops: List[StopModel]
    number_of_routes: int = Field(default_factory=lambda: settings.default_route_count, ge=1)
    start_location: Optional[LocationModel] = None
    end_location: Optional[LocationModel] = None
    return_to_start: bool = Field(
        default=True,
        description="If True, every route ends back at the start location and end_location is ignored.",
    )
    seed: Optional[int] = Field(default=None, description="Seed for reproducible clustering.")
    persist: bool = False


class RouteStopModel(BaseModel):
    sequence: int
    stop_id: str
    name: str
    address: str
    latitude: float
    longitude: float


class RouteModel(BaseModel):
    route_id: int
    color: str
    stop_count: int
    total_distance_miles: float
    exceeds_waypoint_limit: bool
    google_maps_url: str
    apple_maps_url: str
    start_location: LocationModel
    end_location: LocationModel
    stops: List[RouteStopModel]


class RoutingResponse(BaseModel):
    routes: List[RouteModel]
    excluded_stop_ids: List[str]
    metadata: dict


class RouteDistanceRequest(BaseModel):
    start_location: LocationModel
    end_location: LocationModel
    stops: List[StopModel]


class RouteDistanceResponse(BaseModel):
    stop_count: int
    total_distance_miles: float
