"""Domain models for restaurants, reviews and coordinates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Protocol


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned lat/lng rectangle. Built by ``services.geospatial`` helpers."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def has_usable_longitude(self) -> bool:
        """False when the longitude extent ran past the antimeridian or diverged near a pole."""
        return -180.0 <= self.min_lng and self.max_lng <= 180.0

    def contains_latitude(self, latitude: float) -> bool:
        return self.min_lat <= latitude <= self.max_lat

    def contains_longitude(self, longitude: float) -> bool:
        return self.min_lng <= longitude <= self.max_lng

    def contains(self, point: Coordinate) -> bool:
        return self.contains_latitude(point.latitude) and self.contains_longitude(point.longitude)


@dataclass(frozen=True, slots=True)
class SearchRequest:
    center: Coordinate
    radius_m: float


class Located(Protocol):
    """Anything with a position that the nearby search can measure."""

    @property
    def coordinate(self) -> Coordinate: ...


@dataclass(frozen=True, slots=True)
class RatingAggregate:
    """Derived ``(average_rating, review_count)`` pair stored on a restaurant."""

    average_rating: float
    review_count: int

    @classmethod
    def empty(cls) -> "RatingAggregate":
        return cls(average_rating=0.0, review_count=0)

    @classmethod
    def from_ratings(cls, ratings: list[float]) -> "RatingAggregate":
        if not ratings:
            return cls.empty()
        return cls(average_rating=sum(ratings) / len(ratings), review_count=len(ratings))

    def as_fields(self) -> dict[str, Any]:
        return {"average_rating": self.average_rating, "review_count": self.review_count}


@dataclass(slots=True)
class Restaurant:
    """A restaurant record as stored in the ``restaurants`` table."""

    id: str
    name: str
    latitude: float
    longitude: float
    description: str = ""
    address: str = ""
    categories: list[str] = field(default_factory=list)
    average_rating: float = 0.0
    review_count: int = 0
    image_url: Optional[str] = None
    business_hours: Optional[dict[str, str]] = None
    is_crowded: Optional[bool] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def rating(self) -> RatingAggregate:
        return RatingAggregate(self.average_rating, self.review_count)

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> "Restaurant":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            description=row.get("description") or "",
            address=row.get("address") or "",
            categories=list(row.get("categories") or []),
            average_rating=float(row.get("average_rating") or 0.0),
            review_count=int(row.get("review_count") or 0),
            image_url=row.get("image_url"),
            business_hours=row.get("business_hours"),
            is_crowded=row.get("is_crowded"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "description": self.description,
            "address": self.address,
            "categories": list(self.categories),
            "average_rating": self.average_rating,
            "review_count": self.review_count,
            "image_url": self.image_url,
            "business_hours": self.business_hours,
            "is_crowded": self.is_crowded,
        }


@dataclass(slots=True)
class Review:
    """A single user review of a restaurant."""

    id: str
    restaurant_id: str
    user_id: str
    rating: float
    comment: str = ""
    user_name: str = ""
    user_avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    image_urls: list[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, row: dict[str, Any]) -> "Review":
        created_at = row.get("created_at")
        if created_at and isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            id=str(row["id"]),
            restaurant_id=str(row["restaurant_id"]),
            user_id=str(row.get("user_id") or ""),
            rating=float(row["rating"]),
            comment=row.get("comment") or "",
            user_name=row.get("user_name") or "",
            user_avatar_url=row.get("user_avatar_url"),
            created_at=created_at,
            image_urls=list(row.get("image_urls") or []),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "restaurant_id": self.restaurant_id,
            "user_id": self.user_id,
            "rating": self.rating,
            "comment": self.comment,
            "user_name": self.user_name,
            "user_avatar_url": self.user_avatar_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "image_urls": list(self.image_urls),
        }
