"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable

from ..errors import EmptyInputError, ValidationError
from ..models.domain import BoundingBox, Coordinate

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEGREE_LAT = 111_000.0
WALKING_SPEED_M_PER_MIN = 83.33


def distance_m(a: Coordinate, b: Coordinate) -> float:
    """Compute distance in meters between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def is_within_radius(center: Coordinate, point: Coordinate, radius_m: float) -> bool:
    return distance_m(center, point) <= radius_m


def meters_to_degrees_lat(meters: float) -> float:
    return meters / METERS_PER_DEGREE_LAT


def meters_to_degrees_lng(meters: float, latitude: float) -> float:
    """Longitude degrees spanned by ``meters`` at ``latitude``; infinite at the poles."""

    cos_lat = math.cos(math.radians(latitude))
    if cos_lat <= 1e-12:
        return math.inf
    return meters / (METERS_PER_DEGREE_LAT * cos_lat)


def bounding_box(center: Coordinate, radius_m: float) -> BoundingBox:
    """Return a lat/lng box that contains every point within ``radius_m`` of ``center``.

    The box over-approximates the circle. Close to the poles the longitude
    half-extent grows without bound, so the box may report
    ``has_usable_longitude == False``; callers then skip longitude narrowing.
    When the circle reaches a pole every longitude is inside it and the
    longitude bounds are infinite. Otherwise the flat-earth extent is widened
    to the spherical one if the latter is larger, which only happens at high
    latitudes.
    """

    d_lat = meters_to_degrees_lat(radius_m)
    if center.latitude + d_lat >= 90.0 or center.latitude - d_lat <= -90.0:
        d_lng = math.inf
    else:
        d_lng = meters_to_degrees_lng(radius_m, center.latitude)
        ratio = math.sin(radius_m / EARTH_RADIUS_M) / math.cos(math.radians(center.latitude))
        d_lng = max(d_lng, math.degrees(math.asin(min(ratio, 1.0))))
    return BoundingBox(
        min_lat=center.latitude - d_lat,
        max_lat=center.latitude + d_lat,
        min_lng=center.longitude - d_lng,
        max_lng=center.longitude + d_lng,
    )


def centroid(coordinates: Iterable[Coordinate]) -> Coordinate:
    points = list(coordinates)
    if not points:
        raise EmptyInputError("Cannot compute the centroid of an empty coordinate sequence.")
    return Coordinate(
        latitude=sum(p.latitude for p in points) / len(points),
        longitude=sum(p.longitude for p in points) / len(points),
    )


def bounding_box_of(coordinates: Iterable[Coordinate]) -> BoundingBox:
    points = list(coordinates)
    if not points:
        raise EmptyInputError("Cannot compute the bounding box of an empty coordinate sequence.")
    return BoundingBox(
        min_lat=min(p.latitude for p in points),
        max_lat=max(p.latitude for p in points),
        min_lng=min(p.longitude for p in points),
        max_lng=max(p.longitude for p in points),
    )


def validate_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Return a Coordinate or raise ValidationError for out-of-range or non-finite input."""

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValidationError(f"Coordinates must be finite numbers, got ({latitude}, {longitude}).")
    if not -90.0 <= latitude <= 90.0:
        raise ValidationError(f"Latitude must be within [-90, 90], got {latitude}.")
    if not -180.0 <= longitude <= 180.0:
        raise ValidationError(f"Longitude must be within [-180, 180], got {longitude}.")
    return Coordinate(latitude, longitude)


def format_distance(meters: float) -> str:
    """Human readable distance: ``"850m"`` below a kilometre, ``"1.2km"`` above."""

    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"


def walking_minutes(meters: float) -> int:
    return math.ceil(meters / WALKING_SPEED_M_PER_MIN)


def format_walking_time(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes}分"
    hours, rest = divmod(minutes, 60)
    if rest == 0:
        return f"{hours}時間"
    return f"{hours}時間{rest}分"
