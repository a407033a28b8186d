"""Restaurant request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Restaurant


class RestaurantModel(BaseModel):
    id: str
    name: str
    description: str = ""
    latitude: float
    longitude: float
    address: str = ""
    categories: List[str] = Field(default_factory=list)
    average_rating: float = 0.0
    review_count: int = 0
    image_url: Optional[str] = None
    business_hours: Optional[Dict[str, str]] = None
    is_crowded: Optional[bool] = None

    @classmethod
    def from_domain(cls, restaurant: Restaurant) -> "RestaurantModel":
        return cls(**restaurant.to_record())


class NearbyRestaurantModel(RestaurantModel):
    distance_m: float
    distance_text: str
    walking_time: str


class NearbyRestaurantsResponse(BaseModel):
    latitude: float
    longitude: float
    radius_m: float
    items: List[NearbyRestaurantModel]


class RestaurantBatchRequest(BaseModel):
    ids: List[str] = Field(default_factory=list, description="Restaurant ids; duplicates are ignored.")


class RestaurantCreateRequest(BaseModel):
    name: str
    latitude: float
    longitude: float
    description: str = ""
    address: str = ""
    categories: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    business_hours: Optional[Dict[str, str]] = None
