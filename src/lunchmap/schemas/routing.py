"""Directions request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Coordinate
from ..services.routing.models import Route, RouteLeg


class CoordinateModel(BaseModel):
    latitude: float
    longitude: float

    def to_domain(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @classmethod
    def from_domain(cls, point: Coordinate) -> "CoordinateModel":
        return cls(latitude=point.latitude, longitude=point.longitude)


class RouteRequest(BaseModel):
    origin: CoordinateModel
    destination: CoordinateModel
    mode: Optional[str] = Field(default=None, description="driving, walking, bicycling or transit.")
    simplify: Optional[int] = Field(
        default=None,
        ge=1,
        description="Keep every Nth interior point of the returned geometry.",
    )


class AlternativeRoutesRequest(RouteRequest):
    max_alternatives: Optional[int] = Field(default=None, ge=1)


class WaypointRouteRequest(RouteRequest):
    waypoints: List[CoordinateModel] = Field(default_factory=list)


class RouteLegModel(BaseModel):
    points: List[CoordinateModel]
    distance: str
    duration: str
    instructions: List[str]

    @classmethod
    def from_domain(cls, leg: RouteLeg) -> "RouteLegModel":
        return cls(
            points=[CoordinateModel.from_domain(p) for p in leg.points],
            distance=leg.distance,
            duration=leg.duration,
            instructions=list(leg.instructions),
        )


class RouteModel(BaseModel):
    points: List[CoordinateModel]
    distance: str
    duration: str
    instructions: List[str]
    legs: List[RouteLegModel]
    center: Optional[CoordinateModel] = None

    @classmethod
    def from_domain(cls, route: Route) -> "RouteModel":
        return cls(
            points=[CoordinateModel.from_domain(p) for p in route.points],
            distance=route.distance,
            duration=route.duration,
            instructions=list(route.instructions),
            legs=[RouteLegModel.from_domain(leg) for leg in route.legs],
            center=CoordinateModel.from_domain(route.center_point()) if route.points else None,
        )


class TravelEstimateResponse(BaseModel):
    duration: str
    distance: str
