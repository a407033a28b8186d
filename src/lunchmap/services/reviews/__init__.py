"""Review use cases and rating aggregation."""

from .rating import RatingAggregator
from .service import ReviewService

__all__ = ["RatingAggregator", "ReviewService"]
