"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List

from ...errors import EmptyInputError
from ...models.domain import BoundingBox, Coordinate
from ..geospatial import bounding_box_of

LEG_SEPARATOR = " + "


@dataclass(frozen=True, slots=True)
class RouteLeg:
    points: List[Coordinate]
    distance: str
    duration: str
    instructions: List[str]


@dataclass(frozen=True, slots=True)
class Route:
    """A normalized route. Distance and duration are the provider's localized text."""

    points: List[Coordinate]
    distance: str
    duration: str
    instructions: List[str]
    legs: List[RouteLeg] = field(default_factory=list)

    @classmethod
    def from_legs(cls, legs: List[RouteLeg]) -> "Route":
        """Combine legs in order; texts are joined with ``" + "`` rather than summed."""
        if not legs:
            raise EmptyInputError("A route needs at least one leg.")
        return cls(
            points=[point for leg in legs for point in leg.points],
            distance=LEG_SEPARATOR.join(leg.distance for leg in legs),
            duration=LEG_SEPARATOR.join(leg.duration for leg in legs),
            instructions=[step for leg in legs for step in leg.instructions],
            legs=list(legs),
        )

    @property
    def start_point(self) -> Coordinate:
        if not self.points:
            raise EmptyInputError("Route has no points.")
        return self.points[0]

    @property
    def end_point(self) -> Coordinate:
        if not self.points:
            raise EmptyInputError("Route has no points.")
        return self.points[-1]

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def instruction_count(self) -> int:
        return len(self.instructions)

    def simplify(self, factor: int) -> "Route":
        """Keep the first and last point and every ``factor``-th interior point.

        This is a lossy thinning, not a shape-preserving simplification.
        """
        if factor <= 1 or len(self.points) <= 2:
            return self
        interior = [point for i, point in enumerate(self.points[1:-1], start=1) if i % factor == 0]
        return replace(self, points=[self.points[0], *interior, self.points[-1]])

    def bounding_box(self) -> BoundingBox:
        return bounding_box_of(self.points)

    def center_point(self) -> Coordinate:
        box = self.bounding_box()
        return Coordinate((box.min_lat + box.max_lat) / 2, (box.min_lng + box.max_lng) / 2)
