from datetime import datetime, timezone

import pytest

from lunchmap.errors import NotFoundError, StoreError, ValidationError
from lunchmap.models.domain import RatingAggregate, Review
from lunchmap.services.reviews import RatingAggregator, ReviewService


def _review(review_id, restaurant_id, rating, **extra):
    return Review(id=review_id, restaurant_id=restaurant_id, user_id="user-1", rating=rating, **extra)


@pytest.fixture
def stores(make_store, make_restaurant_row):
    restaurants = make_store([make_restaurant_row("r1", 35.0, 139.0), make_restaurant_row("r2", 35.1, 139.1)])
    reviews = make_store()
    return restaurants, reviews


@pytest.fixture
def service(stores):
    restaurants, reviews = stores
    return ReviewService(reviews, RatingAggregator(reviews, restaurants))


def _aggregate(restaurants, restaurant_id):
    row = restaurants.rows[restaurant_id]
    return row["average_rating"], row["review_count"]


def test_aggregate_from_ratings():
    assert RatingAggregate.from_ratings([]) == RatingAggregate(0.0, 0)
    assert RatingAggregate.from_ratings([5.0, 3.0, 4.0]) == RatingAggregate(4.0, 3)


def test_aggregate_follows_review_mutations(stores, service):
    restaurants, _ = stores

    for review_id, rating in [("a", 5), ("b", 3), ("c", 4)]:
        service.add_review(_review(review_id, "r1", rating))
    assert _aggregate(restaurants, "r1") == (4.0, 3)

    service.delete_review("b")
    assert _aggregate(restaurants, "r1") == (4.5, 2)

    service.update_review(_review("a", "r1", 1))
    assert _aggregate(restaurants, "r1") == (2.5, 2)

    service.delete_review("a")
    service.delete_review("c")
    assert _aggregate(restaurants, "r1") == (0.0, 0)


def test_add_review_assigns_id_and_timestamp(service):
    stored = service.add_review(_review("", "r1", 4))

    assert stored.id
    assert stored.created_at is not None
    assert service.get_review(stored.id).rating == 4


def test_review_mutation_survives_aggregate_write_failure(stores, service):
    restaurants, reviews = stores
    restaurants.fail_on.add("write")

    stored = service.add_review(_review("a", "r1", 5))

    assert stored.id == "a"
    assert "a" in reviews.rows
    assert _aggregate(restaurants, "r1") == (0.0, 0)

    restaurants.fail_on.clear()
    service.add_review(_review("b", "r1", 3))
    assert _aggregate(restaurants, "r1") == (4.0, 2)


def test_recompute_rating_raises_on_store_failure(stores):
    restaurants, reviews = stores
    restaurants.fail_on.add("write")

    with pytest.raises(StoreError):
        RatingAggregator(reviews, restaurants).recompute_rating("r1")


def test_moving_a_review_refreshes_both_restaurants(stores, service):
    restaurants, _ = stores
    service.add_review(_review("a", "r1", 5))
    service.add_review(_review("b", "r1", 3))

    service.update_review(_review("a", "r2", 5))

    assert _aggregate(restaurants, "r1") == (3.0, 1)
    assert _aggregate(restaurants, "r2") == (5.0, 1)


@pytest.mark.parametrize("rating", [0, 5.5, -1])
def test_rating_out_of_range_is_rejected(stores, service, rating):
    _, reviews = stores

    with pytest.raises(ValidationError):
        service.add_review(_review("a", "r1", rating))
    assert reviews.calls == []


def test_unknown_review_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.delete_review("missing")
    with pytest.raises(NotFoundError):
        service.update_review(_review("missing", "r1", 3))


def test_reviews_are_listed_newest_first(service):
    service.add_review(_review("old", "r1", 4, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)))
    service.add_review(_review("new", "r1", 2, created_at=datetime(2024, 6, 1, tzinfo=timezone.utc)))
    service.add_review(_review("other", "r2", 5))

    assert [r.id for r in service.list_restaurant_reviews("r1")] == ["new", "old"]
    assert service.get_average_rating("r1") == RatingAggregate(3.0, 2)
