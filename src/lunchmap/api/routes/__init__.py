"""Route group exports."""

from . import directions, health, restaurants, reviews

__all__ = ["directions", "health", "restaurants", "reviews"]
