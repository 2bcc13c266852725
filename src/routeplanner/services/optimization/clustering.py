"""Centroid-based clustering of stops into route groups."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from ...config import settings
from ...models.domain import Stop
from ..geospatial import haversine_miles_matrix

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ClusteringResult:
    clusters: List[List[Stop]]
    converged: bool
    iterations: int
    centroids: List[tuple[float, float]] = field(default_factory=list)


class CentroidClustering:
    """K-Means over great-circle distance with k-means++ seeding.

    Assignment uses haversine miles while centroids are updated as the plain
    mean of member latitudes and longitudes. That approximation holds for
    regional service areas; it breaks down near the poles and across the
    antimeridian.

    Pass a seeded ``numpy.random.Generator`` for reproducible partitions.
    """

    def __init__(
        self,
        *,
        rng: np.random.Generator | None = None,
        max_iterations: int | None = None,
        tolerance: float | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(settings.random_seed)
        self.max_iterations = max_iterations if max_iterations is not None else settings.max_cluster_iterations
        self.tolerance = tolerance if tolerance is not None else settings.convergence_tolerance_degrees
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be > 0, got {self.tolerance}")

    def _seed_centroids(self, coordinates: np.ndarray, k: int) -> np.ndarray:
        """Pick ``k`` initial centroids from the stop coordinates (k-means++)."""
        n = len(coordinates)
        first = int(self.rng.integers(n))
        centroids = [coordinates[first]]

        while len(centroids) < k:
            nearest = haversine_miles_matrix(coordinates, np.array(centroids)).min(axis=1)
            weights = nearest ** 2
            total = weights.sum()
            if total > 0:
                index = int(self.rng.choice(n, p=weights / total))
            else:
                # every stop sits on an existing centroid
                index = int(self.rng.integers(n))
            centroids.append(coordinates[index])

        return np.array(centroids, dtype=float)

    @staticmethod
    def _assign(coordinates: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        # argmin returns the first minimum, so ties go to the lowest centroid index
        return haversine_miles_matrix(coordinates, centroids).argmin(axis=1)

    def cluster(self, stops: Sequence[Stop], k: int) -> ClusteringResult:
        if k < 1:
            raise ValueError("k must be >= 1")

        if not stops:
            return ClusteringResult(clusters=[], converged=True, iterations=0)

        if len(stops) <= k:
            return ClusteringResult(
                clusters=[[stop] for stop in stops],
                converged=True,
                iterations=0,
                centroids=[(stop.coordinate.latitude, stop.coordinate.longitude) for stop in stops],
            )

        coordinates = np.array(
            [(stop.coordinate.latitude, stop.coordinate.longitude) for stop in stops],
            dtype=float,
        )
        centroids = self._seed_centroids(coordinates, k)

        labels = np.zeros(len(stops), dtype=int)
        converged = False
        iterations = 0
        for iterations in range(1, self.max_iterations + 1):
            labels = self._assign(coordinates, centroids)

            updated = centroids.copy()
            for index in range(k):
                members = coordinates[labels == index]
                if len(members) == 0:
                    continue
                updated[index] = members.mean(axis=0)

            shift = np.abs(updated - centroids).max()
            centroids = updated
            logger.debug("Clustering iteration %d: max centroid shift %.6f deg", iterations, shift)
            if shift <= self.tolerance:
                converged = True
                break

        if not converged:
            logger.info("Clustering stopped at the %d iteration cap without converging", self.max_iterations)

        groups: list[list[Stop]] = [[] for _ in range(k)]
        for stop, label in zip(stops, labels):
            groups[int(label)].append(stop)

        clusters: list[list[Stop]] = []
        kept_centroids: list[tuple[float, float]] = []
        for group, centroid in zip(groups, centroids):
            if not group:
                continue
            clusters.append(group)
            kept_centroids.append((float(centroid[0]), float(centroid[1])))

        return ClusteringResult(
            clusters=clusters,
            converged=converged,
            iterations=iterations,
            centroids=kept_centroids,
        )
