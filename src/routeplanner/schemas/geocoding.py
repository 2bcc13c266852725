"""Geocoding request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .routing import StopModel


class GeocodeRequest(BaseModel):
    address: str = Field(..., min_length=1)
    city: str = ""
    state: str = ""
    postal_code: str = ""


class GeocodeResponse(BaseModel):
    found: bool
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    display_name: Optional[str] = None


class ReverseGeocodeRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ReverseGeocodeResponse(BaseModel):
    found: bool
    display_name: Optional[str] = None


class ResolveStopsRequest(BaseModel):
    stops: List[StopModel]


class ResolveStopsResponse(BaseModel):
    stops: List[StopModel]
    unresolved_stop_ids: List[str]
