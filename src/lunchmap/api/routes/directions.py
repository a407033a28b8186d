"""Directions endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ...errors import LunchMapError
from ...schemas.routing import (
    AlternativeRoutesRequest,
    RouteModel,
    RouteRequest,
    TravelEstimateResponse,
    WaypointRouteRequest,
)
from ...services.routing.models import Route
from ...services.routing.normalizer import RouteNormalizer
from ..dependencies import get_route_normalizer
from ..errors import to_http_exception

router = APIRouter(prefix="/directions", tags=["directions"])


def _present(route: Route, simplify: int | None) -> RouteModel:
    if simplify:
        route = route.simplify(simplify)
    return RouteModel.from_domain(route)


@router.post("/route", response_model=RouteModel, status_code=status.HTTP_200_OK)
def get_route(payload: RouteRequest, normalizer: RouteNormalizer = Depends(get_route_normalizer)) -> RouteModel:
    try:
        route = normalizer.get_route(payload.origin.to_domain(), payload.destination.to_domain(), payload.mode)
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return _present(route, payload.simplify)


@router.post("/alternatives", response_model=List[RouteModel], status_code=status.HTTP_200_OK)
def get_alternative_routes(
    payload: AlternativeRoutesRequest,
    normalizer: RouteNormalizer = Depends(get_route_normalizer),
) -> List[RouteModel]:
    try:
        routes = normalizer.get_alternative_routes(
            payload.origin.to_domain(),
            payload.destination.to_domain(),
            payload.mode,
            payload.max_alternatives,
        )
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return [_present(route, payload.simplify) for route in routes]


@router.post("/waypoints", response_model=RouteModel, status_code=status.HTTP_200_OK)
def get_route_with_waypoints(
    payload: WaypointRouteRequest,
    normalizer: RouteNormalizer = Depends(get_route_normalizer),
) -> RouteModel:
    try:
        route = normalizer.get_route_with_waypoints(
            payload.origin.to_domain(),
            payload.destination.to_domain(),
            [point.to_domain() for point in payload.waypoints],
            payload.mode,
        )
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return _present(route, payload.simplify)


@router.post("/estimate", response_model=TravelEstimateResponse, status_code=status.HTTP_200_OK)
def estimate_travel(
    payload: RouteRequest,
    normalizer: RouteNormalizer = Depends(get_route_normalizer),
) -> TravelEstimateResponse:
    origin, destination = payload.origin.to_domain(), payload.destination.to_domain()
    try:
        duration = normalizer.estimated_travel_time(origin, destination, payload.mode)
        distance = normalizer.estimated_travel_distance(origin, destination, payload.mode)
    except LunchMapError as exc:
        raise to_http_exception(exc) from exc
    return TravelEstimateResponse(duration=duration, distance=distance)
