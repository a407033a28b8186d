import pytest

from lunchmap.errors import EmptyInputError, NoRouteFoundError, ProviderError, ValidationError
from lunchmap.models.domain import Coordinate
from lunchmap.services.routing import Route, RouteLeg, RouteNormalizer, encode_polyline

ORIGIN = Coordinate(35.6812, 139.7671)
DESTINATION = Coordinate(35.6896, 139.7006)
STOP = Coordinate(35.6852, 139.7528)


class DummyProvider:
    def __init__(self, directions=None, matrix=None):
        self.directions_payload = directions
        self.matrix_payload = matrix
        self.calls = []

    def directions(self, origin, destination, mode, *, alternatives=False, waypoints=None):
        self.calls.append(("directions", origin, destination, mode, alternatives, waypoints))
        return self.directions_payload

    def distance_matrix(self, origin, destination, mode):
        self.calls.append(("distance_matrix", origin, destination, mode))
        return self.matrix_payload


def _step(text, points=None):
    step = {"html_instructions": text}
    if points is not None:
        step["polyline"] = {"points": encode_polyline(points)}
    return step


def _leg(distance, duration, steps):
    return {"distance": {"text": distance}, "duration": {"text": duration}, "steps": steps}


def _route(points, legs):
    return {"overview_polyline": {"points": encode_polyline(points)}, "legs": legs}


def _simple_route(label="Head north"):
    return _route([ORIGIN, DESTINATION], [_leg("6.1 km", "15 mins", [_step(label), _step("Arrive")])])


def test_get_route_normalizes_first_route():
    provider = DummyProvider({"status": "OK", "routes": [_simple_route(), _simple_route("Other")]})

    route = RouteNormalizer(provider).get_route(ORIGIN, DESTINATION, "driving")

    assert route.distance == "6.1 km"
    assert route.duration == "15 mins"
    assert route.instructions == ["Head north", "Arrive"]
    assert route.start_point.latitude == pytest.approx(ORIGIN.latitude)
    assert route.point_count == 2
    assert provider.calls[0][3] == "driving"


def test_default_mode_is_used_when_none_given():
    provider = DummyProvider({"status": "OK", "routes": [_simple_route()]})

    RouteNormalizer(provider, default_mode="walking").get_route(ORIGIN, DESTINATION)

    assert provider.calls[0][3] == "walking"


def test_unknown_mode_is_rejected_before_calling_provider():
    provider = DummyProvider({"status": "OK", "routes": [_simple_route()]})

    with pytest.raises(ValidationError):
        RouteNormalizer(provider).get_route(ORIGIN, DESTINATION, "teleport")
    assert provider.calls == []


def test_invalid_coordinate_is_rejected():
    provider = DummyProvider({"status": "OK", "routes": [_simple_route()]})

    with pytest.raises(ValidationError):
        RouteNormalizer(provider).get_route(Coordinate(123.0, 0.0), DESTINATION, "walking")
    assert provider.calls == []


def test_rejected_status_raises_provider_error():
    provider = DummyProvider({"status": "REQUEST_DENIED", "error_message": "bad key", "routes": []})

    with pytest.raises(ProviderError) as excinfo:
        RouteNormalizer(provider).get_route(ORIGIN, DESTINATION, "walking")

    assert not isinstance(excinfo.value, NoRouteFoundError)
    assert excinfo.value.status == "REQUEST_DENIED"
    assert "bad key" in str(excinfo.value)


@pytest.mark.parametrize(
    "payload",
    [{"status": "ZERO_RESULTS", "routes": []}, {"status": "OK", "routes": []}],
)
def test_no_route_is_distinguished_from_failure(payload):
    with pytest.raises(NoRouteFoundError):
        RouteNormalizer(DummyProvider(payload)).get_route(ORIGIN, DESTINATION, "walking")


@pytest.mark.parametrize(
    "route",
    [
        {"legs": [_leg("1 km", "2 mins", [])]},
        {"overview_polyline": {"points": ""}, "legs": [{"duration": {"text": "2 mins"}, "steps": []}]},
        {"overview_polyline": {"points": ""}, "legs": [_leg("1 km", "2 mins", [{"maneuver": "turn-left"}])]},
        {"overview_polyline": {"points": "_p~iF"}, "legs": [_leg("1 km", "2 mins", [])]},
        {"overview_polyline": {"points": ""}, "legs": []},
    ],
)
def test_malformed_payload_raises_provider_error(route):
    provider = DummyProvider({"status": "OK", "routes": [route]})

    with pytest.raises(ProviderError):
        RouteNormalizer(provider).get_route(ORIGIN, DESTINATION, "walking")


def test_missing_status_raises_provider_error():
    with pytest.raises(ProviderError):
        RouteNormalizer(DummyProvider({"routes": []})).get_route(ORIGIN, DESTINATION, "walking")


def test_alternatives_never_pad():
    routes = [_simple_route("first"), _simple_route("second")]
    provider = DummyProvider({"status": "OK", "routes": routes})

    result = RouteNormalizer(provider).get_alternative_routes(ORIGIN, DESTINATION, "walking", max_alternatives=5)

    assert [r.instructions[0] for r in result] == ["first", "second"]
    assert provider.calls[0][4] is True


def test_alternatives_truncate_in_provider_order():
    routes = [_simple_route(label) for label in ["a", "b", "c", "d"]]
    provider = DummyProvider({"status": "OK", "routes": routes})

    result = RouteNormalizer(provider).get_alternative_routes(ORIGIN, DESTINATION, "walking", max_alternatives=3)

    assert [r.instructions[0] for r in result] == ["a", "b", "c"]


def test_alternatives_reject_non_positive_limit():
    provider = DummyProvider({"status": "OK", "routes": [_simple_route()]})

    with pytest.raises(ValidationError):
        RouteNormalizer(provider).get_alternative_routes(ORIGIN, DESTINATION, "walking", max_alternatives=0)
    assert provider.calls == []


def test_waypoint_legs_are_folded_in_order():
    first = _leg("2.0 km", "5 mins", [_step("Leg one", [ORIGIN, STOP])])
    second = _leg("3.5 km", "9 mins", [_step("Leg two a", [STOP]), _step("Leg two b", [DESTINATION])])
    provider = DummyProvider({"status": "OK", "routes": [_route([ORIGIN, DESTINATION], [first, second])]})

    route = RouteNormalizer(provider).get_route_with_waypoints(ORIGIN, DESTINATION, [STOP], "driving")

    assert route.distance == "2.0 km + 3.5 km"
    assert route.duration == "5 mins + 9 mins"
    assert route.instructions == ["Leg one", "Leg two a", "Leg two b"]
    assert route.point_count == 4
    assert len(route.legs) == 2
    assert provider.calls[0][5] == [STOP]


def test_waypoint_route_falls_back_to_overview_points():
    legs = [_leg("1 km", "3 mins", [_step("A")]), _leg("2 km", "6 mins", [_step("B")])]
    overview = [ORIGIN, STOP, DESTINATION]
    provider = DummyProvider({"status": "OK", "routes": [_route(overview, legs)]})

    route = RouteNormalizer(provider).get_route_with_waypoints(ORIGIN, DESTINATION, [STOP], "walking")

    assert route.point_count == 3
    assert route.distance == "1 km + 2 km"


def _matrix(element):
    return {"status": "OK", "rows": [{"elements": [element]}]}


def test_travel_estimates_read_matrix_element():
    element = {"status": "OK", "distance": {"text": "6.1 km"}, "duration": {"text": "1 hour 12 mins"}}
    provider = DummyProvider(matrix=_matrix(element))
    normalizer = RouteNormalizer(provider)

    assert normalizer.estimated_travel_time(ORIGIN, DESTINATION, "walking") == "1 hour 12 mins"
    assert normalizer.estimated_travel_distance(ORIGIN, DESTINATION, "walking") == "6.1 km"


def test_travel_estimate_without_route_raises():
    provider = DummyProvider(matrix=_matrix({"status": "ZERO_RESULTS"}))

    with pytest.raises(NoRouteFoundError):
        RouteNormalizer(provider).estimated_travel_time(ORIGIN, DESTINATION, "walking")


def _plain_route(points):
    return Route(points=points, distance="", duration="", instructions=[])


def test_simplify_keeps_endpoints():
    points = [Coordinate(float(i), 0.0) for i in range(10)]

    simplified = _plain_route(points).simplify(3)

    assert [p.latitude for p in simplified.points] == [0.0, 3.0, 6.0, 9.0]
    assert _plain_route(points).simplify(1).points == points
    assert _plain_route(points[:2]).simplify(5).points == points[:2]


def test_route_geometry_helpers():
    route = _plain_route([Coordinate(35.0, 139.0), Coordinate(36.0, 140.0), Coordinate(35.5, 141.0)])

    assert route.center_point() == Coordinate(35.5, 140.0)
    assert route.end_point == Coordinate(35.5, 141.0)


def test_empty_route_helpers_raise():
    route = _plain_route([])
    with pytest.raises(EmptyInputError):
        route.start_point
    with pytest.raises(EmptyInputError):
        route.bounding_box()
    with pytest.raises(EmptyInputError):
        Route.from_legs([])


def test_from_legs_concatenates():
    legs = [
        RouteLeg(points=[Coordinate(0, 0)], distance="1 km", duration="1 min", instructions=["a"]),
        RouteLeg(points=[Coordinate(1, 1)], distance="2 km", duration="2 mins", instructions=["b"]),
    ]

    route = Route.from_legs(legs)

    assert route.points == [Coordinate(0, 0), Coordinate(1, 1)]
    assert route.distance == "1 km + 2 km"
    assert route.instruction_count == 2
