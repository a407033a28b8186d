"""Restaurant rating aggregate maintenance."""

from __future__ import annotations

import logging

from ...data.store import RecordStore
from ...models.domain import RatingAggregate

logger = logging.getLogger(__name__)


class RatingAggregator:
    """Recompute ``(average_rating, review_count)`` from the full review set.

    The aggregate is never updated incrementally: an add event does not
    carry the prior value of an edited rating, and running averages drift
    over many edits. Two concurrent recomputations both read a real
    snapshot of the reviews, so the last write wins with a consistent,
    possibly slightly stale, value.
    """

    def __init__(
        self,
        reviews: RecordStore,
        restaurants: RecordStore,
        *,
        restaurant_field: str = "restaurant_id",
        rating_field: str = "rating",
    ) -> None:
        self.reviews = reviews
        self.restaurants = restaurants
        self.restaurant_field = restaurant_field
        self.rating_field = rating_field

    def compute(self, restaurant_id: str) -> RatingAggregate:
        rows = self.reviews.query_equals(self.restaurant_field, restaurant_id)
        return RatingAggregate.from_ratings([float(row[self.rating_field]) for row in rows])

    def recompute_rating(self, restaurant_id: str) -> RatingAggregate:
        """Recompute and write the aggregate. Raises on store failure."""
        aggregate = self.compute(restaurant_id)
        self.restaurants.write(restaurant_id, aggregate.as_fields())
        logger.debug(
            f"Restaurant {restaurant_id} rating set to {aggregate.average_rating:.3f} "
            f"over {aggregate.review_count} review(s)"
        )
        return aggregate

    def refresh_quietly(self, restaurant_id: str) -> RatingAggregate | None:
        """Recompute as a side effect of a review mutation.

        Failures are logged and swallowed so the mutation itself still
        succeeds; the next successful mutation for the same restaurant
        corrects the stale aggregate.
        """
        try:
            return self.recompute_rating(restaurant_id)
        except Exception:
            logger.exception(f"Failed to update rating aggregate for restaurant {restaurant_id}")
            return None
