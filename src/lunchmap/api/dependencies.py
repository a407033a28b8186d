"""FastAPI dependency providers for stores and services."""

from __future__ import annotations

from fastapi import Depends, HTTPException, status

from ..config import settings
from ..data.store import RecordStore, SupabaseRecordStore
from ..db.supabase import get_supabase_client
from ..services.restaurants.service import RestaurantService
from ..services.reviews.rating import RatingAggregator
from ..services.reviews.service import ReviewService
from ..services.routing.directions_client import DirectionsClient
from ..services.routing.normalizer import RouteNormalizer


def _table(name: str) -> RecordStore:
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase not configured. Set LUNCHMAP_SUPABASE_URL and LUNCHMAP_SUPABASE_KEY environment variables.",
        )
    return SupabaseRecordStore(client, name, max_ids_per_query=settings.id_batch_size)


def get_restaurant_store() -> RecordStore:
    return _table(settings.restaurants_table)


def get_review_store() -> RecordStore:
    return _table(settings.reviews_table)


def get_user_store() -> RecordStore:
    return _table(settings.users_table)


def get_restaurant_service(
    restaurants: RecordStore = Depends(get_restaurant_store),
    users: RecordStore = Depends(get_user_store),
) -> RestaurantService:
    return RestaurantService(restaurants, users)


def get_rating_aggregator(
    reviews: RecordStore = Depends(get_review_store),
    restaurants: RecordStore = Depends(get_restaurant_store),
) -> RatingAggregator:
    return RatingAggregator(reviews, restaurants)


def get_review_service(
    reviews: RecordStore = Depends(get_review_store),
    aggregator: RatingAggregator = Depends(get_rating_aggregator),
) -> ReviewService:
    return ReviewService(reviews, aggregator)


def get_route_normalizer() -> RouteNormalizer:
    try:
        client = DirectionsClient()
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return RouteNormalizer(client)
