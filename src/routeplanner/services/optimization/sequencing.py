"""Greedy nearest-neighbour ordering of stops within a route."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Location, Stop
from ..geospatial import distance_between


def nearest_neighbor_order(stops: Sequence[Stop], start_location: Location) -> list[Stop]:
    """Order ``stops`` by repeatedly visiting the closest unvisited stop.

    Starts from ``start_location``. Distance ties keep the earlier stop in
    input order. Stops without a usable coordinate are left out.
    """
    remaining = [stop for stop in stops if stop.has_coordinate]
    if len(remaining) <= 1:
        return remaining

    ordered: list[Stop] = []
    current = start_location.coordinate

    while remaining:
        nearest_index = 0
        nearest_distance = float("inf")
        for index, stop in enumerate(remaining):
            distance = distance_between(current, stop.coordinate)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_index = index

        nearest = remaining.pop(nearest_index)
        ordered.append(nearest)
        current = nearest.coordinate

    return ordered
