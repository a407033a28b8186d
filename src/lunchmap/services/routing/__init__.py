"""Directions retrieval and route normalization."""

from .models import Route, RouteLeg
from .normalizer import RouteNormalizer
from .polyline import decode_polyline, encode_polyline

__all__ = ["Route", "RouteLeg", "RouteNormalizer", "decode_polyline", "encode_polyline"]
