"""Domain models for service stops, locations and planned routes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    @property
    def is_valid(self) -> bool:
        lat, lon = self.latitude, self.longitude
        if lat is None or lon is None:
            return False
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


@dataclass(frozen=True, slots=True)
class Location:
    """A coordinate with an optional label, used for route start and end points."""

    coordinate: Coordinate
    label: Optional[str] = None

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


@dataclass(frozen=True, slots=True)
class Stop:
    """A customer site to visit. ``coordinate`` is None until its address resolves."""

    stop_id: str
    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    coordinate: Optional[Coordinate] = None

    @property
    def has_coordinate(self) -> bool:
        return self.coordinate is not None and self.coordinate.is_valid

    @property
    def full_address(self) -> str:
        return format_address(self.address, self.city, self.state, self.postal_code)


def format_address(address: str, city: str = "", state: str = "", postal_code: str = "") -> str:
    """Join address parts as ``street, city, state zip``, skipping blanks."""
    region = f"{state} {postal_code}".strip()
    return ", ".join(part.strip() for part in (address, city, region) if part and part.strip())


@dataclass(frozen=True, slots=True)
class Route:
    """One planned route: ordered stops between a shared start and end."""

    route_id: int
    color: str
    stops: tuple[Stop, ...]
    start_location: Location
    end_location: Location

    @property
    def stop_count(self) -> int:
        return len(self.stops)
