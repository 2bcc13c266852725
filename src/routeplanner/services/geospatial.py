"""Geospatial helper functions."""

from __future__ import annotations

import math

import numpy as np

from ..models.domain import Coordinate

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push antipodal points just past 1
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distance_between(origin: Coordinate, destination: Coordinate) -> float:
    return haversine_miles(origin.latitude, origin.longitude, destination.latitude, destination.longitude)


def haversine_miles_matrix(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Pairwise haversine distances between ``points`` (n, 2) and ``centers`` (k, 2).

    Both arrays hold ``[lat, lon]`` rows in degrees. Returns an ``(n, k)`` array in miles.
    """

    lat1 = np.radians(points[:, 0])[:, np.newaxis]
    lon1 = np.radians(points[:, 1])[:, np.newaxis]
    lat2 = np.radians(centers[:, 0])[np.newaxis, :]
    lon2 = np.radians(centers[:, 1])[np.newaxis, :]

    a = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c
