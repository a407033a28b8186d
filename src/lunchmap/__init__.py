"""Lunch Map geo search, directions and rating service."""

__version__ = "0.1.0"
