"""Store-backed search helpers."""

from .batched import BatchedLookup
from .nearby import NearbySearch, build_search_request

__all__ = ["BatchedLookup", "NearbySearch", "build_search_request"]
