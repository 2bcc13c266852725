"""HTTP client for resolving addresses with the Nominatim geocoding service."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

import httpx

from ...config import settings
from ...models.domain import Coordinate, Stop, format_address

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GeocodingResult:
    latitude: float
    longitude: float
    display_name: str

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class NominatimClient:
    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        rate_limit_seconds: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.nominatim_user_agent
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.geocoding_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.geocoding_backoff_seconds
        self.rate_limit_seconds = (
            rate_limit_seconds if rate_limit_seconds is not None else settings.geocoding_rate_limit_seconds
        )
        self._client = http_client

    def _get_client(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=5.0))

    def _backoff(self, attempt: int) -> float:
        return self.backoff_seconds * (2 ** (attempt - 1))

    def _get_json(self, path: str, params: dict) -> object:
        """GET a Nominatim endpoint, retrying transient failures with exponential backoff."""
        url = f"{self.base_url}/{path}"
        headers = {"User-Agent": self.user_agent}
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params, headers=headers)
                    response.raise_for_status()
                    return response.json()
                except (httpx.HTTPStatusError, httpx.TimeoutException, httpx.NetworkError) as e:
                    # client errors will not improve on retry
                    if isinstance(e, httpx.HTTPStatusError):
                        if e.response.status_code < 500 and e.response.status_code != 429:
                            raise
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    wait_time = self._backoff(attempt)
                    logger.debug(
                        f"Nominatim request failed, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt}/{self.max_retries}): {e}"
                    )
                    time.sleep(wait_time)
        finally:
            if self._client is None:
                client.close()

    def geocode(self, address: str, city: str = "", state: str = "", postal_code: str = "") -> Optional[GeocodingResult]:
        """Resolve a free-text address. Returns None when it cannot be resolved."""
        query = format_address(address, city, state, postal_code)
        try:
            data = self._get_json("search", {"format": "json", "q": query, "limit": 1})
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Geocoding failed for '{query}': {exc}")
            return None

        if not isinstance(data, list) or not data:
            logger.info(f"No geocoding match for '{query}'")
            return None

        match = data[0]
        try:
            return GeocodingResult(
                latitude=float(match["lat"]),
                longitude=float(match["lon"]),
                display_name=str(match.get("display_name", "")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Malformed geocoding response for '{query}': {exc}")
            return None

    def batch_geocode(
        self,
        addresses: Sequence[tuple[str, str, str, str]],
        on_progress: Callable[[int, int], None] | None = None,
    ) -> list[Optional[GeocodingResult]]:
        """Geocode ``(address, city, state, postal_code)`` tuples in order, honouring the rate limit."""
        results: list[Optional[GeocodingResult]] = []
        total = len(addresses)
        for index, (address, city, state, postal_code) in enumerate(addresses):
            results.append(self.geocode(address, city, state, postal_code))
            if on_progress is not None:
                on_progress(index + 1, total)
            if index < total - 1 and self.rate_limit_seconds > 0:
                time.sleep(self.rate_limit_seconds)
        return results

    def reverse_geocode(self, coordinate: Coordinate) -> Optional[str]:
        """Return a display address for ``coordinate``, or None."""
        params = {"format": "json", "lat": coordinate.latitude, "lon": coordinate.longitude}
        try:
            data = self._get_json("reverse", params)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Reverse geocoding failed for {coordinate.latitude},{coordinate.longitude}: {exc}")
            return None
        if not isinstance(data, dict):
            return None
        return data.get("display_name") or None


def resolve_stops(
    stops: Sequence[Stop],
    client: NominatimClient | None = None,
    on_progress: Callable[[int, int], None] | None = None,
) -> list[Stop]:
    """Fill in coordinates for stops that lack one; resolved stops are returned as new records."""
    client = client or NominatimClient()
    pending = [index for index, stop in enumerate(stops) if not stop.has_coordinate]
    results = client.batch_geocode(
        [(stops[i].address, stops[i].city, stops[i].state, stops[i].postal_code) for i in pending],
        on_progress=on_progress,
    )
    resolved = {
        index: replace(stops[index], coordinate=result.coordinate)
        for index, result in zip(pending, results)
        if result is not None
    }
    if len(resolved) < len(pending):
        logger.warning(f"{len(pending) - len(resolved)} of {len(pending)} stops could not be geocoded")
    return [resolved.get(index, stop) for index, stop in enumerate(stops)]
