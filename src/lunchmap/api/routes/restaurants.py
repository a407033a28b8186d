"""Restaurant search endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from ...config import settings
from ...errors import LunchMapError
from ...models.domain import Restaurant
from ...schemas.restaurants import (
    NearbyRestaurantModel,
    NearbyRestaurantsResponse,
    RestaurantBatchRequest,
    RestaurantCreateRequest,
    RestaurantModel,
)
from ...services.geospatial import format_distance, format_walking_time, walking_minutes
from ...services.restaurants.service import RestaurantService
from ...services.search.nearby import with_distances
from ..dependencies import get_restaurant_service
from ..errors import to_http_exception

router = APIRouter(tags=["restaurants"])


@router.get("/restaurants/nearby", response_model=NearbyRestaurantsResponse, status_code=status.HTTP_200_OK)
def find_nearby(
    latitude: float = Query(..., description="Search center latitude in degrees"),
    longitude: float = Query(..., description="Search center longitude in degrees"),
    radius: float | None = Query(default=None, description="Search radius in meters"),
    rank: bool = Query(default=False, description="Sort results by ascending distance"),
    service: RestaurantService = Depends(get_restaurant_service),
) -> NearbyRestaurantsResponse:
    try:
        restaurants = service.find_nearby(latitude, longitude, radius, rank_by_distance=rank)
        located = with_distances(latitude, longitude, restaurants)
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc

    items = [
        NearbyRestaurantModel(
            **restaurant.to_record(),
            distance_m=distance,
            distance_text=format_distance(distance),
            walking_time=format_walking_time(walking_minutes(distance)),
        )
        for restaurant, distance in located
    ]
    return NearbyRestaurantsResponse(
        latitude=latitude,
        longitude=longitude,
        radius_m=radius if radius is not None else settings.default_search_radius_m,
        items=items,
    )


@router.post("/restaurants/batch", response_model=List[RestaurantModel], status_code=status.HTTP_200_OK)
def fetch_restaurants(
    payload: RestaurantBatchRequest,
    service: RestaurantService = Depends(get_restaurant_service),
) -> List[RestaurantModel]:
    try:
        restaurants = service.fetch_by_ids(payload.ids)
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return [RestaurantModel.from_domain(r) for r in restaurants]


@router.post("/restaurants", response_model=RestaurantModel, status_code=status.HTTP_201_CREATED)
def create_restaurant(
    payload: RestaurantCreateRequest,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantModel:
    try:
        restaurant = service.create_restaurant(Restaurant(id="", **payload.model_dump()))
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return RestaurantModel.from_domain(restaurant)


@router.get("/restaurants/{restaurant_id}", response_model=RestaurantModel, status_code=status.HTTP_200_OK)
def get_restaurant(
    restaurant_id: str,
    service: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantModel:
    try:
        return RestaurantModel.from_domain(service.get_restaurant(restaurant_id))
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc


@router.get("/users/{user_id}/favorites", response_model=List[RestaurantModel], status_code=status.HTTP_200_OK)
def get_favorites(
    user_id: str,
    service: RestaurantService = Depends(get_restaurant_service),
) -> List[RestaurantModel]:
    try:
        restaurants = service.get_favorite_restaurants(user_id)
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return [RestaurantModel.from_domain(r) for r in restaurants]
