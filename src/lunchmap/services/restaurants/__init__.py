"""Restaurant lookup use cases."""

from .service import RestaurantService

__all__ = ["RestaurantService"]
