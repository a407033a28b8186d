import pytest

from fakes import FakeStore, restaurant_row


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def make_restaurant_row():
    return restaurant_row
