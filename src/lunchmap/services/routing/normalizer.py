"""Fetch routes from the directions provider and normalize them into ``Route`` records."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Protocol, Sequence, get_args

from ...config import TravelMode, settings
from ...errors import NoRouteFoundError, ProviderError, ValidationError
from ...models.domain import Coordinate
from ..geospatial import validate_coordinate
from .models import Route, RouteLeg
from .polyline import decode_polyline

logger = logging.getLogger(__name__)

TRAVEL_MODES = frozenset(get_args(TravelMode))


class DirectionsProvider(Protocol):
    def directions(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: str,
        *,
        alternatives: bool = False,
        waypoints: Sequence[Coordinate] | None = None,
    ) -> dict: ...

    def distance_matrix(self, origin: Coordinate, destination: Coordinate, mode: str) -> dict: ...


def _field(container: Any, key: str, expected: type | tuple[type, ...], where: str) -> Any:
    if not isinstance(container, dict) or key not in container:
        raise ProviderError(f"Provider response is missing '{key}' in {where}.")
    value = container[key]
    if not isinstance(value, expected):
        raise ProviderError(f"Provider response field '{where}.{key}' has unexpected type {type(value).__name__}.")
    return value


def _text(container: Any, key: str, where: str) -> str:
    return _field(_field(container, key, dict, where), "text", str, f"{where}.{key}")


def _decode(encoded: str, where: str) -> list[Coordinate]:
    try:
        return decode_polyline(encoded)
    except ValueError as exc:
        raise ProviderError(f"Malformed polyline in {where}: {exc}") from exc


def _check_status(payload: dict, operation: str) -> None:
    status = _field(payload, "status", str, "response")
    if status == "OK":
        return
    if status == "ZERO_RESULTS":
        raise NoRouteFoundError(f"No route found for {operation}.", status=status)
    message = payload.get("error_message") or status
    logger.error(f"{operation} failed: status={status}, error_message={payload.get('error_message')}")
    raise ProviderError(f"Directions provider rejected {operation}: {message}", status=status)


def parse_leg(leg: Any, where: str = "leg") -> RouteLeg:
    steps = _field(leg, "steps", list, where)
    instructions: list[str] = []
    points: list[Coordinate] = []
    for index, step in enumerate(steps):
        step_where = f"{where}.steps[{index}]"
        instructions.append(_field(step, "html_instructions", str, step_where))
        if isinstance(step, dict) and "polyline" in step:
            points.extend(_decode(_field(step["polyline"], "points", str, f"{step_where}.polyline"), step_where))
    return RouteLeg(
        points=points,
        distance=_text(leg, "distance", where),
        duration=_text(leg, "duration", where),
        instructions=instructions,
    )


def _overview_points(route: Any, where: str) -> list[Coordinate]:
    overview = _field(route, "overview_polyline", dict, where)
    return _decode(_field(overview, "points", str, f"{where}.overview_polyline"), f"{where}.overview_polyline")


def parse_single_leg_route(route: Any, where: str = "routes[0]") -> Route:
    legs = _field(route, "legs", list, where)
    if not legs:
        raise ProviderError(f"Provider route {where} has no legs.")
    leg = parse_leg(legs[0], f"{where}.legs[0]")
    return Route(
        points=_overview_points(route, where),
        distance=leg.distance,
        duration=leg.duration,
        instructions=list(leg.instructions),
        legs=[leg],
    )


def parse_multi_leg_route(route: Any, where: str = "routes[0]") -> Route:
    raw_legs = _field(route, "legs", list, where)
    if not raw_legs:
        raise ProviderError(f"Provider route {where} has no legs.")
    legs = [parse_leg(leg, f"{where}.legs[{i}]") for i, leg in enumerate(raw_legs)]
    combined = Route.from_legs(legs)
    if all(leg.points for leg in legs):
        return combined
    # Legs without step geometry: fall back to the route-level overview line.
    return replace(combined, points=_overview_points(route, where))


def _routes(payload: dict, operation: str) -> list:
    _check_status(payload, operation)
    routes = _field(payload, "routes", list, "response")
    if not routes:
        raise NoRouteFoundError(f"No route found for {operation}.", status="OK")
    return routes


class RouteNormalizer:
    """Single-request, stateless route retrieval."""

    def __init__(self, provider: DirectionsProvider, default_mode: str | None = None) -> None:
        self.provider = provider
        self.default_mode = default_mode or settings.default_travel_mode

    def _prepare(self, points: Sequence[Coordinate], mode: str | None) -> str:
        for point in points:
            validate_coordinate(point.latitude, point.longitude)
        mode = mode or self.default_mode
        if mode not in TRAVEL_MODES:
            raise ValidationError(f"Unsupported travel mode '{mode}'. Expected one of {sorted(TRAVEL_MODES)}.")
        return mode

    def get_route(self, origin: Coordinate, destination: Coordinate, mode: str | None = None) -> Route:
        mode = self._prepare([origin, destination], mode)
        payload = self.provider.directions(origin, destination, mode)
        return parse_single_leg_route(_routes(payload, "route request")[0])

    def get_alternative_routes(
        self,
        origin: Coordinate,
        destination: Coordinate,
        mode: str | None = None,
        max_alternatives: int | None = None,
    ) -> list[Route]:
        """Return up to ``max_alternatives`` routes in the provider's order. Never pads."""
        limit = max_alternatives if max_alternatives is not None else settings.default_alternatives
        if limit < 1:
            raise ValidationError(f"max_alternatives must be at least 1, got {limit}.")
        mode = self._prepare([origin, destination], mode)
        payload = self.provider.directions(origin, destination, mode, alternatives=True)
        routes = _routes(payload, "alternative routes request")
        return [parse_single_leg_route(route, f"routes[{i}]") for i, route in enumerate(routes[:limit])]

    def get_route_with_waypoints(
        self,
        origin: Coordinate,
        destination: Coordinate,
        waypoints: Sequence[Coordinate],
        mode: str | None = None,
    ) -> Route:
        """Route through ``waypoints`` in order, folded into one Route.

        Leg distances and durations are joined with ``" + "`` because the
        provider returns localized, unit-suffixed text rather than numbers.
        """
        mode = self._prepare([origin, destination, *waypoints], mode)
        payload = self.provider.directions(origin, destination, mode, waypoints=list(waypoints))
        return parse_multi_leg_route(_routes(payload, "waypoint route request")[0])

    def _matrix_element(self, origin: Coordinate, destination: Coordinate, mode: str | None) -> dict:
        mode = self._prepare([origin, destination], mode)
        payload = self.provider.distance_matrix(origin, destination, mode)
        _check_status(payload, "distance matrix request")
        rows = _field(payload, "rows", list, "response")
        if not rows:
            raise NoRouteFoundError("Distance matrix returned no rows.", status="OK")
        elements = _field(rows[0], "elements", list, "rows[0]")
        if not elements:
            raise NoRouteFoundError("Distance matrix returned no elements.", status="OK")
        element = elements[0]
        status = _field(element, "status", str, "rows[0].elements[0]")
        if status != "OK":
            raise NoRouteFoundError(f"No travel estimate available: {status}.", status=status)
        return element

    def estimated_travel_time(self, origin: Coordinate, destination: Coordinate, mode: str | None = None) -> str:
        return _text(self._matrix_element(origin, destination, mode), "duration", "rows[0].elements[0]")

    def estimated_travel_distance(self, origin: Coordinate, destination: Coordinate, mode: str | None = None) -> str:
        return _text(self._matrix_element(origin, destination, mode), "distance", "rows[0].elements[0]")
