"""HTTP client for the Google Directions and Distance Matrix APIs."""

from __future__ import annotations

import logging
import time
from typing import Any, Sequence

import httpx

from ...config import settings
from ...errors import ProviderError
from ...models.domain import Coordinate

logger = logging.getLogger(__name__)


def format_location(point: Coordinate) -> str:
    return f"{point.latitude},{point.longitude}"


class DirectionsClient:
    """Thin transport over the provider's JSON endpoints.

    Returns the raw payload. Status interpretation and decoding live in
    ``RouteNormalizer``. Transport retries are off unless
    ``max_retries`` is raised.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        distance_matrix_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        if not self.api_key:
            raise ValueError("Google Maps API key is not configured.")
        self.base_url = base_url or settings.directions_base_url
        self.distance_matrix_url = distance_matrix_url or settings.distance_matrix_base_url
        self.timeout = timeout if timeout is not None else settings.directions_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.directions_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.directions_backoff_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0)),
            transport=self.transport,
        )

    def _get_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        query = {**params, "key": self.api_key}
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=query)
                    response.raise_for_status()
                    data = response.json()
                    if not isinstance(data, dict):
                        raise ProviderError("Directions provider returned a non-object JSON payload.")
                    return data
                except httpx.HTTPStatusError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ProviderError(
                            f"Directions provider returned HTTP {e.response.status_code}.",
                            status=str(e.response.status_code),
                        ) from e
                    time.sleep(self.backoff_seconds * attempt)
                except httpx.TransportError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Directions request failed after {attempt} attempt(s): {e}")
                        raise ProviderError(f"Failed to reach directions provider at {url}: {e}") from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Directions network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except ValueError as e:
                    # Body was not JSON
                    raise ProviderError(f"Directions provider returned invalid JSON: {e}") from e
        finally:
            client.close()

    def directions(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: str,
        *,
        alternatives: bool = False,
        waypoints: Sequence[Coordinate] | None = None,
    ) -> dict[str, Any]:
        params = {
            "origin": format_location(origin),
            "destination": format_location(destination),
            "mode": mode,
        }
        if alternatives:
            params["alternatives"] = "true"
        if waypoints:
            params["waypoints"] = "|".join(format_location(point) for point in waypoints)
        return self._get_json(self.base_url, params)

    def distance_matrix(self, origin: Coordinate, destination: Coordinate, mode: str) -> dict[str, Any]:
        params = {
            "origins": format_location(origin),
            "destinations": format_location(destination),
            "mode": mode,
        }
        return self._get_json(self.distance_matrix_url, params)


def check_health(client: DirectionsClient | None = None) -> bool:
    """Check provider reachability with a minimal directions request (Tokyo Station to Yurakucho)."""
    try:
        directions = client or DirectionsClient()
        data = directions.directions(
            Coordinate(35.6812, 139.7671),
            Coordinate(35.6751, 139.7630),
            "walking",
        )
        return data.get("status") in {"OK", "ZERO_RESULTS"}
    except (ProviderError, ValueError) as e:
        logger.debug(f"Directions health check failed: {e}")
        return False
