"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import RouteDistanceRequest, RouteDistanceResponse, RoutingRequest, RoutingResponse
from ...services.routing.service import compute_route_distance, export_geojson, optimize_routes

router = APIRouter(prefix="/routes", tags=["routes"])
logger = logging.getLogger(__name__)


@router.post("/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutingRequest) -> RoutingResponse:
    try:
        return optimize_routes(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize routes: {str(exc)}"
        ) from exc


@router.post("/distance", response_model=RouteDistanceResponse, status_code=status.HTTP_200_OK)
def route_distance(payload: RouteDistanceRequest) -> RouteDistanceResponse:
    """Total great-circle miles for an already ordered route."""
    return compute_route_distance(payload)


@router.post("/export/geojson", status_code=status.HTTP_200_OK)
def export_routes_geojson(payload: RoutingRequest) -> dict:
    """Plan routes and return them as a GeoJSON FeatureCollection."""
    try:
        return export_geojson(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error exporting routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export routes: {str(exc)}"
        ) from exc
