"""Review request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import RatingAggregate, Review


class ReviewCreateRequest(BaseModel):
    restaurant_id: str
    user_id: str
    rating: float
    comment: str = ""
    user_name: str = ""
    user_avatar_url: Optional[str] = None
    image_urls: List[str] = Field(default_factory=list)

    def to_domain(self, review_id: str = "") -> Review:
        return Review(
            id=review_id,
            restaurant_id=self.restaurant_id,
            user_id=self.user_id,
            rating=self.rating,
            comment=self.comment,
            user_name=self.user_name,
            user_avatar_url=self.user_avatar_url,
            image_urls=list(self.image_urls),
        )


class ReviewModel(BaseModel):
    id: str
    restaurant_id: str
    user_id: str
    rating: float
    comment: str
    user_name: str = ""
    user_avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    image_urls: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, review: Review) -> "ReviewModel":
        return cls(
            id=review.id,
            restaurant_id=review.restaurant_id,
            user_id=review.user_id,
            rating=review.rating,
            comment=review.comment,
            user_name=review.user_name,
            user_avatar_url=review.user_avatar_url,
            created_at=review.created_at,
            image_urls=list(review.image_urls),
        )


class RatingAggregateModel(BaseModel):
    restaurant_id: str
    average_rating: float
    review_count: int

    @classmethod
    def from_domain(cls, restaurant_id: str, aggregate: RatingAggregate) -> "RatingAggregateModel":
        return cls(
            restaurant_id=restaurant_id,
            average_rating=aggregate.average_rating,
            review_count=aggregate.review_count,
        )
