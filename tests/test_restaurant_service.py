import pytest

from lunchmap.config import settings
from lunchmap.errors import NotFoundError, ValidationError
from lunchmap.models.domain import Restaurant
from lunchmap.services.restaurants import RestaurantService

from fakes import FakeStore, restaurant_row


def _service(rows=(), users=()):
    restaurants = FakeStore(list(rows))
    user_store = FakeStore(list(users))
    return restaurants, RestaurantService(restaurants, user_store, batch_size=10, max_parallel_requests=2)


def test_find_nearby_uses_default_radius(monkeypatch):
    monkeypatch.setattr(settings, "default_search_radius_m", 500.0)
    _, service = _service([restaurant_row("near", 35.6815, 139.7671), restaurant_row("far", 35.69, 139.7671)])

    assert [r.id for r in service.find_nearby(35.6812, 139.7671)] == ["near"]


def test_find_nearby_rejects_radius_above_maximum():
    restaurants, service = _service()

    with pytest.raises(ValidationError):
        service.find_nearby(35.0, 139.0, 10_000_000)
    assert restaurants.calls == []


def test_get_restaurant():
    _, service = _service([restaurant_row("r1", 35.0, 139.0, categories=["ramen"])])

    assert service.get_restaurant("r1").categories == ["ramen"]
    with pytest.raises(NotFoundError):
        service.get_restaurant("nope")


def test_favorites_resolve_through_batched_lookup():
    rows = [restaurant_row(f"r{i}", 35.0, 139.0) for i in range(12)]
    user = {"id": "u1", "favorite_restaurant_ids": [f"r{i}" for i in range(12)] + ["gone"]}
    restaurants, service = _service(rows, [user])

    favorites = service.get_favorite_restaurants("u1")

    assert len(favorites) == 12
    assert restaurants.count("query_by_id_list") == 2


def test_favorites_of_unknown_user():
    _, service = _service()

    with pytest.raises(NotFoundError):
        service.get_favorite_restaurants("ghost")


def test_user_without_favorites_gets_empty_list():
    restaurants, service = _service(users=[{"id": "u1"}])

    assert service.get_favorite_restaurants("u1") == []
    assert restaurants.calls == []


def test_create_restaurant_starts_with_empty_aggregate():
    restaurants, service = _service()

    created = service.create_restaurant(
        Restaurant(id="", name="Soba Ya", latitude=35.0, longitude=139.0, average_rating=4.9, review_count=7)
    )

    assert created.id
    assert restaurants.rows[created.id]["average_rating"] == 0.0
    assert restaurants.rows[created.id]["review_count"] == 0


def test_create_restaurant_validates_coordinates():
    restaurants, service = _service()

    with pytest.raises(ValidationError):
        service.create_restaurant(Restaurant(id="x", name="Nowhere", latitude=100.0, longitude=0.0))
    assert restaurants.calls == []
