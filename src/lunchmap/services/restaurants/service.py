"""Restaurant lookup use cases built on the nearby search and batched lookup."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace

from ...config import settings
from ...data.store import RecordStore
from ...errors import NotFoundError, ValidationError
from ...models.domain import RatingAggregate, Restaurant
from ..geospatial import validate_coordinate
from ..search.batched import BatchedLookup
from ..search.nearby import NearbySearch

logger = logging.getLogger(__name__)


class RestaurantService:
    def __init__(
        self,
        restaurants: RecordStore,
        users: RecordStore | None = None,
        *,
        batch_size: int | None = None,
        max_parallel_requests: int | None = None,
    ) -> None:
        self.restaurants = restaurants
        self.users = users
        self.nearby = NearbySearch(restaurants, Restaurant.from_record)
        self.lookup = BatchedLookup(
            restaurants,
            Restaurant.from_record,
            batch_size=batch_size,
            max_parallel_requests=max_parallel_requests,
        )

    def find_nearby(
        self,
        latitude: float,
        longitude: float,
        radius_m: float | None = None,
        *,
        rank_by_distance: bool = False,
    ) -> list[Restaurant]:
        radius = settings.default_search_radius_m if radius_m is None else radius_m
        if radius > settings.max_search_radius_m:
            raise ValidationError(
                f"Search radius {radius}m exceeds the maximum of {settings.max_search_radius_m}m."
            )
        return self.nearby.find_nearby(latitude, longitude, radius, rank_by_distance=rank_by_distance)

    def fetch_by_ids(self, ids: list[str]) -> list[Restaurant]:
        return self.lookup.fetch_by_ids(ids)

    def get_restaurant(self, restaurant_id: str) -> Restaurant:
        row = self.restaurants.get(restaurant_id)
        if row is None:
            raise NotFoundError(f"Restaurant {restaurant_id} not found.")
        return Restaurant.from_record(row)

    def get_favorite_restaurants(self, user_id: str) -> list[Restaurant]:
        if self.users is None:
            raise RuntimeError("User store is not configured.")
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found.")
        favorite_ids = [str(fid) for fid in (user.get("favorite_restaurant_ids") or [])]
        return self.fetch_by_ids(favorite_ids)

    def create_restaurant(self, restaurant: Restaurant) -> Restaurant:
        """Insert a restaurant with an empty ``(0.0, 0)`` rating aggregate."""
        validate_coordinate(restaurant.latitude, restaurant.longitude)
        empty = RatingAggregate.empty()
        stored = replace(
            restaurant,
            id=restaurant.id or str(uuid.uuid4()),
            average_rating=empty.average_rating,
            review_count=empty.review_count,
        )
        self.restaurants.insert(stored.to_record())
        logger.info(f"Created restaurant {stored.id} ({stored.name})")
        return stored
