"""Review use cases. Every mutation refreshes the restaurant's rating aggregate."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from ...data.store import RecordStore
from ...errors import NotFoundError, ValidationError
from ...models.domain import RatingAggregate, Review
from .rating import RatingAggregator

logger = logging.getLogger(__name__)

MIN_RATING = 1.0
MAX_RATING = 5.0


def _validate_rating(rating: float) -> None:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING:g} and {MAX_RATING:g}, got {rating}.")


class ReviewService:
    def __init__(self, reviews: RecordStore, aggregator: RatingAggregator) -> None:
        self.reviews = reviews
        self.aggregator = aggregator

    def add_review(self, review: Review) -> Review:
        _validate_rating(review.rating)
        if not review.restaurant_id:
            raise ValidationError("A review must reference a restaurant.")
        stored = replace(
            review,
            id=review.id or str(uuid.uuid4()),
            created_at=review.created_at or datetime.now(timezone.utc),
        )
        self.reviews.insert(stored.to_record())
        self.aggregator.refresh_quietly(stored.restaurant_id)
        return stored

    def update_review(self, review: Review) -> Review:
        _validate_rating(review.rating)
        existing = self.get_review(review.id)
        review = replace(review, created_at=review.created_at or existing.created_at)
        fields = review.to_record()
        fields.pop("id")
        self.reviews.write(review.id, fields)
        self.aggregator.refresh_quietly(review.restaurant_id)
        if existing.restaurant_id != review.restaurant_id:
            # Review moved between restaurants; the old one lost a rating.
            self.aggregator.refresh_quietly(existing.restaurant_id)
        return review

    def delete_review(self, review_id: str) -> None:
        existing = self.get_review(review_id)
        self.reviews.delete(review_id)
        self.aggregator.refresh_quietly(existing.restaurant_id)

    def get_review(self, review_id: str) -> Review:
        row = self.reviews.get(review_id)
        if row is None:
            raise NotFoundError(f"Review {review_id} not found.")
        return Review.from_record(row)

    def list_restaurant_reviews(self, restaurant_id: str) -> list[Review]:
        reviews = [Review.from_record(row) for row in self.reviews.query_equals("restaurant_id", restaurant_id)]
        reviews.sort(key=lambda r: r.created_at.timestamp() if r.created_at else 0.0, reverse=True)
        return reviews

    def get_average_rating(self, restaurant_id: str) -> RatingAggregate:
        """Aggregate computed from the current reviews, ignoring the stored copy."""
        return self.aggregator.compute(restaurant_id)
