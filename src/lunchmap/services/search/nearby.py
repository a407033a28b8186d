"""Radius search over a store that can only range-filter one field."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Generic, TypeVar

from ...data.store import Record, RecordStore
from ...errors import ValidationError
from ...models.domain import Located, Restaurant, SearchRequest
from ..geospatial import bounding_box, distance_m, validate_coordinate

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Located)


def build_search_request(latitude: float, longitude: float, radius_m: float) -> SearchRequest:
    center = validate_coordinate(latitude, longitude)
    if not math.isfinite(radius_m) or radius_m <= 0:
        raise ValidationError(f"Search radius must be a positive number of meters, got {radius_m}.")
    return SearchRequest(center=center, radius_m=radius_m)


class NearbySearch(Generic[T]):
    """Find located entities within a radius of a point.

    The store is asked for every row whose latitude falls inside the
    bounding box of the circle. Longitude is then checked in memory, and
    the exact haversine distance makes the final decision, since the
    rectangle's corners lie outside the circle.
    """

    def __init__(
        self,
        store: RecordStore,
        parse: Callable[[Record], T] = Restaurant.from_record,
        *,
        latitude_field: str = "latitude",
    ) -> None:
        self.store = store
        self.parse = parse
        self.latitude_field = latitude_field

    def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_m: float,
        *,
        rank_by_distance: bool = False,
    ) -> list[T]:
        request = build_search_request(latitude, longitude, radius_m)
        return self.search(request, rank_by_distance=rank_by_distance)

    def search(self, request: SearchRequest, *, rank_by_distance: bool = False) -> list[T]:
        box = bounding_box(request.center, request.radius_m)
        rows = self.store.query_range(self.latitude_field, box.min_lat, box.max_lat)
        narrow_longitude = box.has_usable_longitude

        matches: list[tuple[float, T]] = []
        for row in rows:
            entity = self.parse(row)
            point = entity.coordinate
            if narrow_longitude and not box.contains_longitude(point.longitude):
                continue
            distance = distance_m(request.center, point)
            if distance <= request.radius_m:
                matches.append((distance, entity))

        logger.debug(
            f"Nearby search at ({request.center.latitude}, {request.center.longitude}) "
            f"r={request.radius_m}m: {len(rows)} candidates, {len(matches)} within radius"
        )
        if rank_by_distance:
            matches.sort(key=lambda item: item[0])
        return [entity for _, entity in matches]


def with_distances(center_latitude: float, center_longitude: float, entities: list[Any]) -> list[tuple[Any, float]]:
    """Pair each located entity with its distance in meters from the given center."""

    center = validate_coordinate(center_latitude, center_longitude)
    return [(entity, distance_m(center, entity.coordinate)) for entity in entities]
